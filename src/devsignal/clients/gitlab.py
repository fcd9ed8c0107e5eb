from logging import Logger
from typing import Any

import httpx

from devsignal.clients.http import JsonHttpClient, path_segment
from devsignal.settings import GITLAB_API_BASE_URL, UPSTREAM_TIMEOUT_SECONDS, USER_AGENT

DEFAULT_PROJECTS_LIMIT = 10
DEFAULT_SEARCH_PROJECTS_LIMIT = 5
DEFAULT_COMMITS_LIMIT = 5


def get_httpx_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=GITLAB_API_BASE_URL,
        timeout=UPSTREAM_TIMEOUT_SECONDS,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        transport=transport,
    )


class GitLabProxyClient(JsonHttpClient):
    """Issues single requests against the public GitLab v4 REST API and hands back the raw JSON body."""

    def __init__(self, httpx_client: httpx.AsyncClient | None = None, logger: Logger | None = None):
        super().__init__(httpx_client=httpx_client or get_httpx_client(), logger=logger)

    async def find_users(self, username: str) -> list[dict[str, Any]]:
        """Look up GitLab users by exact username. GitLab answers with a list of zero or one users."""

        users = await self._perform_rest_request(action="Find GitLab user", path="/users", params={"username": username})

        return users or []

    async def list_user_projects(self, user_id: int | str, per_page: int = DEFAULT_PROJECTS_LIMIT) -> list[dict[str, Any]]:
        projects = await self._perform_rest_request(
            action="List GitLab projects",
            path=f"/users/{path_segment(user_id)}/projects",
            params={"order_by": "updated_at", "per_page": per_page},
        )

        return projects or []

    async def list_project_commits(self, project_id: int | str, per_page: int = DEFAULT_COMMITS_LIMIT) -> list[dict[str, Any]]:
        commits = await self._perform_rest_request(
            action="List GitLab commits",
            path=f"/projects/{path_segment(project_id)}/repository/commits",
            params={"per_page": per_page},
        )

        return commits or []
