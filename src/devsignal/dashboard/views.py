import asyncio
import random
from abc import ABC, abstractmethod
from logging import Logger
from typing import Any

from fastmcp.utilities.logging import get_logger

from devsignal.dashboard.analytics import MOOD_ASLEEP, calculate_market_mood, generate_mock_history, with_prediction
from devsignal.dashboard.demo import (
    COMMITS_DEMO_WARNING,
    DEMO_COMMITS,
    DEMO_QUOTES,
    GITHUB_DEMO_WARNING,
    GITLAB_DEMO_WARNING,
    HISTORY_DEMO_WARNING,
    demo_github_profile,
    demo_github_repositories,
    demo_gitlab_profile,
    demo_gitlab_projects,
)
from devsignal.dashboard.fallback import describe_error, fetch_with_fallback
from devsignal.dashboard.scheduler import RefreshScheduler
from devsignal.dashboard.sources import DeveloperDataSource
from devsignal.models.dashboard import TABS, ProfileCard, Tab
from devsignal.models.developer import CommitSummary, DeveloperProfile, Provider, ProjectSummary
from devsignal.models.market import PricePoint, Quote
from devsignal.settings import DEFAULT_GITHUB_USERNAME, DEFAULT_GITLAB_USERNAME, REFRESH_INTERVAL_SECONDS

logger: Logger = get_logger(name=__name__)


class View(ABC):
    """A card that loads its data, shows a banner instead of failing, and is never left empty."""

    data_source: DeveloperDataSource
    loading: bool
    error: str | None

    def __init__(self, data_source: DeveloperDataSource):
        self.data_source = data_source
        self.loading = False
        self.error = None

    async def refresh(self) -> None:
        self.loading = True
        self.error = None

        try:
            await self._load()
        finally:
            self.loading = False

    @abstractmethod
    async def _load(self) -> None:
        """Load the view's data, falling back to demo data and setting `error` on failure."""


class MarketView(View):
    quotes: list[Quote]
    mood: str

    def __init__(self, data_source: DeveloperDataSource):
        super().__init__(data_source=data_source)
        self.quotes = []
        self.mood = MOOD_ASLEEP

    async def _load_quotes(self) -> list[Quote]:
        return [Quote.model_validate(quote) for quote in await self.data_source.get_quotes()]

    async def _load(self) -> None:
        result = await fetch_with_fallback(loader=self._load_quotes, demo_data=list(DEMO_QUOTES), warning=describe_error)

        self.quotes = result.data
        self.mood = calculate_market_mood(self.quotes)
        self.error = result.warning


class PriceChartView(View):
    symbol: str
    points: list[PricePoint]

    def __init__(self, data_source: DeveloperDataSource, symbol: str, rng: random.Random | None = None):
        super().__init__(data_source=data_source)
        self.symbol = symbol
        self.points = []
        self._rng = rng

    async def _load_history(self) -> list[PricePoint]:
        return [PricePoint.model_validate(point) for point in await self.data_source.get_price_history(symbol=self.symbol)]

    async def _load(self) -> None:
        demo_points = with_prediction(generate_mock_history(rng=self._rng), rng=self._rng)

        result = await fetch_with_fallback(loader=self._load_history, demo_data=demo_points, warning=HISTORY_DEMO_WARNING)

        self.points = result.data
        self.error = result.warning

    async def set_symbol(self, symbol: str) -> None:
        symbol = symbol.strip().upper()

        if symbol and symbol != self.symbol:
            self.symbol = symbol
            await self.refresh()


class DeveloperCardView(View):
    """A GitHub or GitLab profile card with per-project commit drill-down."""

    provider: Provider
    demo_warning: str

    username: str
    profile: DeveloperProfile | None
    projects: list[ProjectSummary]
    commits: dict[int | str, list[CommitSummary]]
    commit_warnings: dict[int | str, str]
    expanded: int | str | None

    def __init__(self, data_source: DeveloperDataSource, username: str):
        super().__init__(data_source=data_source)
        self.username = username
        self.profile = None
        self.projects = []
        self._reset_commits()

    def _reset_commits(self) -> None:
        self.commits = {}
        self.commit_warnings = {}
        self.expanded = None

    @abstractmethod
    async def _load_card(self) -> ProfileCard: ...

    @abstractmethod
    def _demo_card(self) -> ProfileCard: ...

    @abstractmethod
    async def _load_commits(self, project: ProjectSummary) -> list[CommitSummary]: ...

    async def _load(self) -> None:
        result = await fetch_with_fallback(loader=self._load_card, demo_data=self._demo_card(), warning=self.demo_warning)

        self.profile = result.data.profile
        self.projects = result.data.projects
        self.error = result.warning
        self._reset_commits()

    async def set_username(self, username: str, force: bool = False) -> None:
        """Switch the card to another user. Blank input is ignored, and an unchanged username only reloads when forced."""

        username = username.strip()

        if not username:
            return

        if username == self.username and not force:
            return

        self.username = username
        await self.refresh()

    def get_project(self, key: int | str) -> ProjectSummary | None:
        """Find a shown project by id, or else by name."""

        by_id = next((project for project in self.projects if project.id == key), None)

        return by_id or next((project for project in self.projects if project.name == key), None)

    async def load_commits(self, project: ProjectSummary) -> list[CommitSummary]:
        """Load the latest commits of a project unless they are already cached. The cache is keyed by project id."""

        if project.id in self.commits:
            return self.commits[project.id]

        result = await fetch_with_fallback(
            loader=lambda: self._load_commits(project),
            demo_data=list(DEMO_COMMITS),
            warning=COMMITS_DEMO_WARNING,
        )

        self.commits[project.id] = result.data
        if result.warning:
            self.commit_warnings[project.id] = result.warning

        return result.data

    async def toggle_project(self, key: int | str) -> None:
        """Collapse the project if it is expanded, otherwise expand it and load its commits."""

        project = self.get_project(key)

        if project is None:
            msg = f"Project {key} is not shown on the {self.provider} card for {self.username}."
            raise ValueError(msg)

        if self.expanded == project.id:
            self.expanded = None
            return

        self.expanded = project.id

        _ = await self.load_commits(project)


class GitHubCardView(DeveloperCardView):
    provider: Provider = "github"
    demo_warning: str = GITHUB_DEMO_WARNING

    def __init__(self, data_source: DeveloperDataSource, username: str = DEFAULT_GITHUB_USERNAME):
        super().__init__(data_source=data_source, username=username)

    async def _load_card(self) -> ProfileCard:
        user, repositories = await asyncio.gather(
            self.data_source.get_github_user(username=self.username),
            self.data_source.list_github_repositories(username=self.username),
        )

        return ProfileCard(
            profile=DeveloperProfile.from_github_user(user),
            projects=[ProjectSummary.from_github_repository(repository) for repository in repositories],
        )

    def _demo_card(self) -> ProfileCard:
        return ProfileCard(profile=demo_github_profile(self.username), projects=demo_github_repositories(self.username))

    async def _load_commits(self, project: ProjectSummary) -> list[CommitSummary]:
        commits = await self.data_source.list_github_commits(owner=project.owner or self.username, repo=project.name)

        return [CommitSummary.from_github_commit(commit) for commit in commits]


class GitLabCardView(DeveloperCardView):
    provider: Provider = "gitlab"
    demo_warning: str = GITLAB_DEMO_WARNING

    def __init__(self, data_source: DeveloperDataSource, username: str = DEFAULT_GITLAB_USERNAME):
        super().__init__(data_source=data_source, username=username)

    async def _load_card(self) -> ProfileCard:
        user: dict[str, Any] = await self.data_source.get_gitlab_user(username=self.username)
        projects = await self.data_source.list_gitlab_projects(user_id=user["id"])

        return ProfileCard(
            profile=DeveloperProfile.from_gitlab_user(user, project_count=len(projects)),
            projects=[ProjectSummary.from_gitlab_project(project) for project in projects],
        )

    def _demo_card(self) -> ProfileCard:
        return ProfileCard(profile=demo_gitlab_profile(self.username), projects=demo_gitlab_projects(self.username))

    async def _load_commits(self, project: ProjectSummary) -> list[CommitSummary]:
        commits = await self.data_source.list_gitlab_commits(project_id=project.id)

        return [CommitSummary.from_gitlab_commit(commit) for commit in commits]


class Dashboard:
    """The financial, GitHub, and GitLab tabs, refreshed together."""

    def __init__(
        self,
        data_source: DeveloperDataSource,
        github_username: str = DEFAULT_GITHUB_USERNAME,
        gitlab_username: str = DEFAULT_GITLAB_USERNAME,
        active_tab: Tab = "financial",
    ):
        self.data_source: DeveloperDataSource = data_source
        self.market: MarketView = MarketView(data_source=data_source)
        self.github: GitHubCardView = GitHubCardView(data_source=data_source, username=github_username)
        self.gitlab: GitLabCardView = GitLabCardView(data_source=data_source, username=gitlab_username)
        self.active_tab: Tab = "financial"
        self.select_tab(active_tab)

    @property
    def loading(self) -> bool:
        return self.market.loading or self.github.loading or self.gitlab.loading

    def select_tab(self, tab: str) -> Tab:
        for known_tab in TABS:
            if known_tab == tab:
                self.active_tab = known_tab
                return known_tab

        msg = f"Unknown tab {tab}, expected one of {', '.join(TABS)}"
        raise ValueError(msg)

    async def refresh_all(self) -> None:
        _ = await asyncio.gather(self.market.refresh(), self.github.refresh(), self.gitlab.refresh())

    def scheduler(self, interval: float = REFRESH_INTERVAL_SECONDS) -> RefreshScheduler:
        return RefreshScheduler(callback=self.refresh_all, interval=interval)
