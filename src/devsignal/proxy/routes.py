from logging import Logger
from typing import Any

from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from devsignal.clients.errors.upstream import ClientError
from devsignal.clients.github import GitHubProxyClient
from devsignal.clients.gitlab import DEFAULT_SEARCH_PROJECTS_LIMIT, GitLabProxyClient
from devsignal.proxy.envelopes import ErrorEnvelope, HealthEnvelope, envelope_response, upstream_failure

GITLAB_SEARCH_NOT_FOUND_SUGGESTION = "Check the username or try a different GitLab username"
GITLAB_SEARCH_UNAVAILABLE_SUGGESTION = "The GitLab API might be temporarily unavailable"


def gitlab_user_not_found_message(username: str) -> str:
    return f'GitLab user "{username}" not found'


class ProxyServer:
    """Relays GitHub and GitLab REST lookups for the dashboard.

    Every route issues one upstream request, or two sequential ones for the GitLab search, and relays the upstream JSON
    unchanged. Upstream failures become a 500 error envelope.
    """

    github_client: GitHubProxyClient
    gitlab_client: GitLabProxyClient
    logger: Logger

    def __init__(
        self,
        github_client: GitHubProxyClient | None = None,
        gitlab_client: GitLabProxyClient | None = None,
        logger: Logger | None = None,
    ):
        self.logger = logger or get_logger(name=__name__)
        self.github_client = github_client or GitHubProxyClient(logger=self.logger)
        self.gitlab_client = gitlab_client or GitLabProxyClient(logger=self.logger)

    def register_routes(self, fastmcp: FastMCP[Any]) -> FastMCP[Any]:
        routes = {
            "/": self.health,
            "/api/github/user/{username}": self.get_github_user,
            "/api/github/user/{username}/repos": self.get_github_repositories,
            "/api/github/repos/{owner}/{repo}/commits": self.get_github_commits,
            "/api/gitlab/user/{username}": self.get_gitlab_user,
            "/api/gitlab/projects/{user_id}": self.get_gitlab_projects,
            "/api/gitlab/projects/{project_id}/commits": self.get_gitlab_commits,
            "/api/gitlab/search/{username}": self.search_gitlab_user,
        }

        for path, handler in routes.items():
            _ = fastmcp.custom_route(path=path, methods=["GET"])(handler)

        return fastmcp

    async def health(self, _request: Request) -> Response:
        return envelope_response(HealthEnvelope(), status_code=200)

    # GitHub

    async def get_github_user(self, request: Request) -> Response:
        username: str = request.path_params["username"]

        try:
            user = await self.github_client.get_user(username=username)
        except ClientError as e:
            self.logger.error(f"GitHub API error: {e}")
            return upstream_failure(message="Error fetching GitHub user data", detail=str(e))

        return JSONResponse(user)

    async def get_github_repositories(self, request: Request) -> Response:
        username: str = request.path_params["username"]

        try:
            repositories = await self.github_client.list_user_repositories(username=username)
        except ClientError as e:
            self.logger.error(f"GitHub repos error: {e}")
            return upstream_failure(message="Error fetching GitHub repositories", detail=str(e))

        return JSONResponse(repositories)

    async def get_github_commits(self, request: Request) -> Response:
        owner: str = request.path_params["owner"]
        repo: str = request.path_params["repo"]

        try:
            commits = await self.github_client.list_commits(owner=owner, repo=repo)
        except ClientError as e:
            self.logger.error(f"GitHub commits error: {e}")
            return upstream_failure(message="Error fetching GitHub commits", detail=str(e))

        return JSONResponse(commits)

    # GitLab

    async def get_gitlab_user(self, request: Request) -> Response:
        username: str = request.path_params["username"]

        try:
            users = await self.gitlab_client.find_users(username=username)
        except ClientError as e:
            self.logger.error(f"GitLab API error: {e}")
            return upstream_failure(message="Error fetching GitLab user data", detail=str(e))

        if not users:
            return envelope_response(ErrorEnvelope(message=gitlab_user_not_found_message(username), error="User not found"), status_code=404)

        return JSONResponse(users[0])

    async def get_gitlab_projects(self, request: Request) -> Response:
        user_id: str = request.path_params["user_id"]

        try:
            projects = await self.gitlab_client.list_user_projects(user_id=user_id)
        except ClientError as e:
            self.logger.error(f"GitLab API error: {e}")
            return upstream_failure(message="Error fetching GitLab projects", detail=str(e))

        return JSONResponse(projects)

    async def get_gitlab_commits(self, request: Request) -> Response:
        project_id: str = request.path_params["project_id"]

        try:
            commits = await self.gitlab_client.list_project_commits(project_id=project_id)
        except ClientError as e:
            self.logger.error(f"GitLab commits error: {e}")
            return upstream_failure(message="Error fetching GitLab commits", detail=str(e))

        return JSONResponse(commits)

    async def search_gitlab_user(self, request: Request) -> Response:
        """Look up a GitLab user and, only when found, their most recently updated projects."""

        username: str = request.path_params["username"]

        try:
            users = await self.gitlab_client.find_users(username=username)

            if not users:
                return envelope_response(
                    ErrorEnvelope(message=gitlab_user_not_found_message(username), suggestion=GITLAB_SEARCH_NOT_FOUND_SUGGESTION),
                    status_code=404,
                )

            user: dict[str, Any] = users[0]
            projects = await self.gitlab_client.list_user_projects(user_id=user["id"], per_page=DEFAULT_SEARCH_PROJECTS_LIMIT)
        except ClientError as e:
            self.logger.error(f"GitLab search error: {e}")
            return upstream_failure(message="Error searching GitLab user", detail=str(e), suggestion=GITLAB_SEARCH_UNAVAILABLE_SUGGESTION)

        return JSONResponse({"user": user, "projects": projects, "success": True})
