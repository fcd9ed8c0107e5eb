import click

from devsignal.dashboard.render import render_banner, render_dashboard, render_developer_card, render_market, render_quote
from devsignal.dashboard.views import Dashboard, GitHubCardView, GitLabCardView, MarketView
from devsignal.models.market import Quote
from tests.dashboard.conftest import FakeDataSource


def plain(lines: list[str]) -> str:
    return click.unstyle("\n".join(lines))


def test_render_banner():
    assert render_banner(None) == []
    assert render_banner("") == []
    assert click.unstyle(render_banner("Data request timeout 🚦")[0]) == "Note: Data request timeout 🚦"


def test_render_quote():
    rising = Quote(symbol="AAPL", name="Apple Inc.", price=227.76, change=2.86, changes_percentage=1.27)
    falling = Quote(symbol="GOOGL", name="Alphabet Inc.", price=175.24, change=-1.15, changes_percentage=-0.65)

    assert "+2.86 (+1.27%)" in click.unstyle(render_quote(rising))
    assert "-1.15 (-0.65%)" in click.unstyle(render_quote(falling))
    assert "$   227.76" in render_quote(rising)


async def test_render_market(data_source: FakeDataSource):
    view = MarketView(data_source=data_source)
    await view.refresh()

    text = plain(render_market(view))

    assert text.startswith("Financial Overview")
    assert "NVDA" in text
    assert "Note:" not in text


def test_render_card_before_loading(data_source: FakeDataSource):
    view = GitHubCardView(data_source=data_source, username="octocat")

    assert plain(render_developer_card(view)) == "🐙 Github Profile\n  Loading..."


async def test_render_github_card(data_source: FakeDataSource):
    view = GitHubCardView(data_source=data_source, username="octocat")
    await view.refresh()
    await view.toggle_project("hello-world")

    text = plain(render_developer_card(view))

    assert "The Octocat (@octocat)" in text
    assert "Projects: 8 | Followers: 17000 | Following: 9" in text
    assert "Recent Projects (2)" in text
    assert "- hello-world  ⭐ 2500  🍴 2000  🔄 2024-03-01" in text
    assert "• Merge pull request #6 (2012-03-06)" in text
    assert "🐙 https://github.com/octocat" in text


async def test_render_gitlab_card_without_projects(data_source: FakeDataSource):
    data_source.answers["list_gitlab_projects"] = []
    view = GitLabCardView(data_source=data_source, username="gitlab-user")
    await view.refresh()

    text = plain(render_developer_card(view))

    assert "Projects: 0" in text
    assert "Followers" not in text
    assert "No projects found" in text


async def test_render_dashboard_tabs(data_source: FakeDataSource):
    dashboard = Dashboard(data_source=data_source, github_username="octocat", gitlab_username="gitlab-user")
    await dashboard.refresh_all()

    financial = click.unstyle(render_dashboard(dashboard))
    assert financial.startswith("🚀  DevSignal Analytics")
    assert "[📈 Financial]" in financial
    assert "NVDA" in financial

    _ = dashboard.select_tab("gitlab")
    gitlab = click.unstyle(render_dashboard(dashboard))
    assert "[🦊 GitLab]" in gitlab
    assert "🦊 Gitlab Profile" in gitlab
    assert "NVDA" not in gitlab
