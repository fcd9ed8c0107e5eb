"""Fixed datasets shown whenever a live call fails, so that no card renders empty."""

from devsignal.models.developer import CommitSummary, DeveloperProfile, ProjectSummary
from devsignal.models.market import Quote

GITHUB_DEMO_WARNING = "GitHub data temporarily unavailable - using demo data"
GITLAB_DEMO_WARNING = "GitLab data temporarily unavailable - using demo data"
COMMITS_DEMO_WARNING = "Commits temporarily unavailable - using demo data"
HISTORY_DEMO_WARNING = "Using demonstration data - real data temporarily unavailable"

DEMO_QUOTES: tuple[Quote, ...] = (
    Quote(symbol="AAPL", name="Apple Inc.", price=227.76, change=2.86, changes_percentage=1.27),
    Quote(symbol="MSFT", name="Microsoft Corp.", price=415.86, change=5.32, changes_percentage=1.30),
    Quote(symbol="GOOGL", name="Alphabet Inc.", price=175.24, change=-1.15, changes_percentage=-0.65),
    Quote(symbol="AMZN", name="Amazon.com Inc.", price=178.22, change=3.45, changes_percentage=1.97),
    Quote(symbol="META", name="Meta Platforms", price=492.64, change=8.72, changes_percentage=1.80),
)


def demo_github_profile(username: str) -> DeveloperProfile:
    return DeveloperProfile(
        provider="github",
        id=123456,
        username=username,
        name="Lukhanyo N",
        avatar_url="https://avatars.githubusercontent.com/u/0?v=4",
        web_url=f"https://github.com/{username}",
        bio="Full-stack developer",
        project_count=2,
        followers=12,
        following=8,
    )


def demo_github_repositories(username: str) -> list[ProjectSummary]:
    return [
        ProjectSummary(
            id=1,
            name="intellisignal-dashboard",
            owner=username,
            description="Full-stack analytics dashboard",
            stars=8,
            forks=2,
            language="JavaScript",
            last_activity_at="2024-01-15T10:30:00Z",
            web_url=f"https://github.com/{username}/intellisignal-dashboard",
        ),
        ProjectSummary(
            id=2,
            name="devops-pipeline",
            owner=username,
            description="CI/CD automation setup",
            stars=5,
            forks=1,
            language="Shell",
            last_activity_at="2024-01-10T14:20:00Z",
            web_url=f"https://github.com/{username}/devops-pipeline",
        ),
    ]


def demo_gitlab_profile(username: str) -> DeveloperProfile:
    return DeveloperProfile(
        provider="gitlab",
        id=123456,
        username=username,
        name="Lukhanyo N",
        avatar_url="https://gitlab.com/uploads/-/system/user/avatar/placeholder.png",
        web_url=f"https://gitlab.com/{username}",
        project_count=2,
    )


def demo_gitlab_projects(username: str) -> list[ProjectSummary]:
    return [
        ProjectSummary(
            id=1,
            name="intellisignal-dashboard",
            owner=username,
            description="Full-stack analytics dashboard",
            stars=8,
            forks=2,
            last_activity_at="2024-01-15T10:30:00Z",
            web_url=f"https://gitlab.com/{username}/intellisignal-dashboard",
        ),
        ProjectSummary(
            id=2,
            name="devops-pipeline",
            owner=username,
            description="CI/CD automation setup",
            stars=5,
            forks=1,
            last_activity_at="2024-01-10T14:20:00Z",
            web_url=f"https://gitlab.com/{username}/devops-pipeline",
        ),
    ]


DEMO_COMMITS: tuple[CommitSummary, ...] = (
    CommitSummary(sha="0000001", message="Add market mood indicator", date="2024-01-15T10:30:00Z"),
    CommitSummary(sha="0000002", message="Initial commit", date="2024-01-10T14:20:00Z"),
)
