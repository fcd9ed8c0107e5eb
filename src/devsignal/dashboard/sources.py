from abc import ABC, abstractmethod
from logging import Logger
from typing import Any

import httpx

from devsignal.clients.errors.upstream import RequestError, ResourceNotFoundError
from devsignal.clients.github import GitHubProxyClient
from devsignal.clients.gitlab import GitLabProxyClient
from devsignal.clients.http import JsonHttpClient, path_segment
from devsignal.settings import DASHBOARD_TIMEOUT_SECONDS, USER_AGENT

# Each profile card shows this many of the most recently updated repositories or projects
CARD_PROJECTS_LIMIT = 5


class DeveloperDataSource(ABC):
    """Where the dashboard views load their raw data from. Every method raises a `ClientError` on failure."""

    async def aclose(self) -> None:
        """Release any connections held by the source."""

    @abstractmethod
    async def get_quotes(self) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def get_price_history(self, symbol: str) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def get_github_user(self, username: str) -> dict[str, Any]: ...

    @abstractmethod
    async def list_github_repositories(self, username: str) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def list_github_commits(self, owner: str, repo: str) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def get_gitlab_user(self, username: str) -> dict[str, Any]:
        """Raises `ResourceNotFoundError` when no user has that username."""

    @abstractmethod
    async def list_gitlab_projects(self, user_id: int | str) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def list_gitlab_commits(self, project_id: int | str) -> list[dict[str, Any]]: ...


class ProxyDataSource(JsonHttpClient, DeveloperDataSource):
    """Loads everything through a running DevSignal proxy."""

    def __init__(
        self,
        base_url: str,
        httpx_client: httpx.AsyncClient | None = None,
        logger: Logger | None = None,
    ):
        httpx_client = httpx_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=DASHBOARD_TIMEOUT_SECONDS,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )
        super().__init__(httpx_client=httpx_client, logger=logger)

    async def get_quotes(self) -> list[dict[str, Any]]:
        return await self._perform_rest_request(action="Get dashboard quotes", path="/api/dashboard-data")

    async def get_price_history(self, symbol: str) -> list[dict[str, Any]]:
        return await self._perform_rest_request(action="Get price history", path=f"/api/historical/{path_segment(symbol)}")

    async def get_github_user(self, username: str) -> dict[str, Any]:
        return await self._perform_rest_request(action="Get GitHub user", path=f"/api/github/user/{path_segment(username)}")

    async def list_github_repositories(self, username: str) -> list[dict[str, Any]]:
        return await self._perform_rest_request(action="List GitHub repositories", path=f"/api/github/user/{path_segment(username)}/repos")

    async def list_github_commits(self, owner: str, repo: str) -> list[dict[str, Any]]:
        path = f"/api/github/repos/{path_segment(owner)}/{path_segment(repo)}/commits"
        return await self._perform_rest_request(action="List GitHub commits", path=path)

    async def get_gitlab_user(self, username: str) -> dict[str, Any]:
        return await self._perform_rest_request(action="Get GitLab user", path=f"/api/gitlab/user/{path_segment(username)}")

    async def list_gitlab_projects(self, user_id: int | str) -> list[dict[str, Any]]:
        return await self._perform_rest_request(action="List GitLab projects", path=f"/api/gitlab/projects/{path_segment(user_id)}")

    async def list_gitlab_commits(self, project_id: int | str) -> list[dict[str, Any]]:
        return await self._perform_rest_request(action="List GitLab commits", path=f"/api/gitlab/projects/{path_segment(project_id)}/commits")


class UpstreamDataSource(DeveloperDataSource):
    """Calls GitHub and GitLab directly. There is no market data provider, so quotes and history always fail."""

    github_client: GitHubProxyClient
    gitlab_client: GitLabProxyClient

    def __init__(self, github_client: GitHubProxyClient | None = None, gitlab_client: GitLabProxyClient | None = None):
        self.github_client = github_client or GitHubProxyClient()
        self.gitlab_client = gitlab_client or GitLabProxyClient()

    async def aclose(self) -> None:
        await self.gitlab_client.aclose()

    async def get_quotes(self) -> list[dict[str, Any]]:
        raise RequestError(action="Get dashboard quotes", message="No market data provider is configured.")

    async def get_price_history(self, symbol: str) -> list[dict[str, Any]]:
        raise RequestError(action="Get price history", message="No market data provider is configured.", extra_info={"symbol": symbol})

    async def get_github_user(self, username: str) -> dict[str, Any]:
        return await self.github_client.get_user(username=username)

    async def list_github_repositories(self, username: str) -> list[dict[str, Any]]:
        return await self.github_client.list_user_repositories(username=username, per_page=CARD_PROJECTS_LIMIT)

    async def list_github_commits(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self.github_client.list_commits(owner=owner, repo=repo)

    async def get_gitlab_user(self, username: str) -> dict[str, Any]:
        users = await self.gitlab_client.find_users(username=username)

        if not users:
            raise ResourceNotFoundError(action="Get GitLab user", resource=username)

        return users[0]

    async def list_gitlab_projects(self, user_id: int | str) -> list[dict[str, Any]]:
        return await self.gitlab_client.list_user_projects(user_id=user_id, per_page=CARD_PROJECTS_LIMIT)

    async def list_gitlab_commits(self, project_id: int | str) -> list[dict[str, Any]]:
        return await self.gitlab_client.list_project_commits(project_id=project_id)
