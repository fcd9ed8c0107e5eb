import click

from devsignal.dashboard.views import Dashboard, DeveloperCardView, MarketView
from devsignal.models.market import Quote

PROVIDER_ICONS = {"github": "🐙", "gitlab": "🦊"}
TAB_LABELS = {"financial": "📈 Financial", "github": "🐙 GitHub", "gitlab": "🦊 GitLab"}


def render_banner(message: str | None) -> list[str]:
    if not message:
        return []
    return [click.style(f"Note: {message}", fg="yellow")]


def render_quote(quote: Quote) -> str:
    color = "green" if quote.change >= 0 else "red"
    sign = "+" if quote.change >= 0 else ""
    movement = click.style(f"{sign}{quote.change:.2f} ({sign}{quote.changes_percentage:.2f}%)", fg=color)
    return f"  {quote.symbol:<6} {quote.name:<18} ${quote.price:>9.2f}  {movement}"


def render_market(view: MarketView) -> list[str]:
    lines = ["Financial Overview", *render_banner(view.error)]
    lines.extend(render_quote(quote) for quote in view.quotes)
    return lines


def render_developer_card(view: DeveloperCardView) -> list[str]:
    icon = PROVIDER_ICONS[view.provider]
    lines = [f"{icon} {view.provider.capitalize()} Profile", *render_banner(view.error)]

    if view.profile is None:
        return [*lines, "  Loading..."]

    profile = view.profile
    lines.append(click.style(f"  {profile.name or profile.username} (@{profile.username})", bold=True))
    if profile.bio:
        lines.append(f"  {profile.bio}")

    counts = [f"Projects: {profile.project_count}"]
    if profile.followers is not None:
        counts.append(f"Followers: {profile.followers}")
    if profile.following is not None:
        counts.append(f"Following: {profile.following}")
    lines.append("  " + " | ".join(counts))

    lines.append(f"  Recent Projects ({len(view.projects)})")
    if not view.projects:
        lines.append("    No projects found")

    for project in view.projects:
        lines.append(f"    - {project.name}  ⭐ {project.stars}  🍴 {project.forks}  🔄 {project.last_activity_date or 'n/a'}")
        if project.description:
            lines.append(f"      {project.description}")

        if view.expanded == project.id:
            lines.extend(f"      {line}" for line in render_banner(view.commit_warnings.get(project.id)))
            for commit in view.commits.get(project.id, []):
                lines.append(f"      • {commit.message.splitlines()[0] if commit.message else ''} ({(commit.date or '').split('T')[0]})")

    if profile.web_url:
        lines.append(f"  {icon} {profile.web_url}")

    return lines


def render_dashboard(dashboard: Dashboard) -> str:
    header = [
        f"{dashboard.market.mood}  DevSignal Analytics",
        "Financial markets + Developer insights in one dashboard",
        "  ".join(
            click.style(f"[{label}]", bold=True) if tab == dashboard.active_tab else label for tab, label in TAB_LABELS.items()
        ),
        "",
    ]

    if dashboard.active_tab == "github":
        body = render_developer_card(dashboard.github)
    elif dashboard.active_tab == "gitlab":
        body = render_developer_card(dashboard.gitlab)
    else:
        body = render_market(dashboard.market)

    return "\n".join([*header, *body])
