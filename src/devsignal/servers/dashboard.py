import random
from logging import Logger
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.utilities.logging import get_logger

from devsignal.dashboard.sources import DeveloperDataSource, UpstreamDataSource
from devsignal.dashboard.views import GitHubCardView, GitLabCardView, MarketView, PriceChartView
from devsignal.models.dashboard import CommitList, MarketOverview, PriceChart, ProfileOverview
from devsignal.models.developer import ProjectSummary
from devsignal.servers.shared.annotations import GITHUB_USERNAME, GITLAB_USERNAME, OWNER, PROJECT, PROVIDER, SYMBOL
from devsignal.servers.shared.errors import MissingOwnerError


class DashboardServer:
    """Exposes the dashboard cards as MCP tools. Every tool answers with demo data and a warning rather than failing."""

    data_source: DeveloperDataSource
    logger: Logger

    def __init__(self, data_source: DeveloperDataSource | None = None, logger: Logger | None = None, rng: random.Random | None = None):
        self.logger = logger or get_logger(name=__name__)
        self.data_source = data_source or UpstreamDataSource()
        self.rng = rng

    def register_tools(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_market_overview))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_price_chart))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_github_profile))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_gitlab_profile))
        _ = fastmcp.add_tool(tool=Tool.from_function(fn=self.get_project_commits))

        return fastmcp

    async def get_market_overview(self) -> MarketOverview:
        """Get the quotes shown on the financial tab and the market mood derived from them."""

        view = MarketView(data_source=self.data_source)
        await view.refresh()

        return MarketOverview(quotes=view.quotes, mood=view.mood, warning=view.error)

    async def get_price_chart(self, symbol: SYMBOL) -> PriceChart:
        """Get the recent price history of a stock. Demo history ends with a toy predicted point."""

        view = PriceChartView(data_source=self.data_source, symbol=symbol.strip().upper(), rng=self.rng)
        await view.refresh()

        return PriceChart(symbol=view.symbol, points=view.points, warning=view.error)

    async def get_github_profile(self, username: GITHUB_USERNAME) -> ProfileOverview:
        """Get a GitHub user's profile and their most recently updated repositories."""

        view = GitHubCardView(data_source=self.data_source, username=username.strip())
        await view.refresh()

        return self._profile_overview(view)

    async def get_gitlab_profile(self, username: GITLAB_USERNAME) -> ProfileOverview:
        """Get a GitLab user's profile and their most recently updated projects."""

        view = GitLabCardView(data_source=self.data_source, username=username.strip())
        await view.refresh()

        return self._profile_overview(view)

    async def get_project_commits(self, provider: PROVIDER, project: PROJECT, owner: OWNER = None) -> CommitList:
        """Get the latest commits of a GitHub repository or GitLab project."""

        if provider == "github":
            if not owner:
                raise MissingOwnerError(project=project)

            view = GitHubCardView(data_source=self.data_source, username=owner)
            summary = ProjectSummary(id=project, name=project, owner=owner)
        else:
            view = GitLabCardView(data_source=self.data_source, username=owner or "")
            summary = ProjectSummary(id=project, name=project)

        commits = await view.load_commits(summary)

        self.logger.info(f"Loaded {len(commits)} commits for {provider} project {project}")

        return CommitList(provider=provider, project=project, commits=commits, warning=view.commit_warnings.get(summary.id))

    def _profile_overview(self, view: GitHubCardView | GitLabCardView) -> ProfileOverview:
        if view.profile is None:
            msg = f"The {view.provider} card for {view.username} has no profile after refreshing."
            raise RuntimeError(msg)

        return ProfileOverview(profile=view.profile, projects=view.projects, warning=view.error)
