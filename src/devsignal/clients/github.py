from collections.abc import Awaitable, Callable
from logging import Logger, getLogger
from typing import Any

import httpx
from githubkit import GitHub as GitHubKit
from githubkit.auth import UnauthAuthStrategy
from githubkit.exception import GitHubException as GitHubKitGitHubException
from githubkit.exception import RequestFailed as GitHubKitRequestFailed
from githubkit.exception import RequestTimeout as GitHubKitRequestTimeout
from githubkit.response import Response as GitHubKitResponse

from devsignal.clients.errors.upstream import RequestError, RequestTimeoutError, ResourceNotFoundError
from devsignal.clients.http import path_segment
from devsignal.settings import GITHUB_API_BASE_URL, UPSTREAM_TIMEOUT_SECONDS, USER_AGENT

NOT_FOUND_ERROR = 404

DEFAULT_REPOSITORIES_LIMIT = 10
DEFAULT_COMMITS_LIMIT = 5


def get_githubkit_client(async_transport: httpx.AsyncBaseTransport | None = None) -> GitHubKit[Any]:
    # Public endpoints only, one attempt per request
    return GitHubKit[UnauthAuthStrategy](
        UnauthAuthStrategy(),
        base_url=GITHUB_API_BASE_URL,
        user_agent=USER_AGENT,
        timeout=UPSTREAM_TIMEOUT_SECONDS,
        auto_retry=False,
        http_cache=False,
        async_transport=async_transport,
    )


class GitHubProxyClient:
    """Issues single requests against the public GitHub REST API and hands back the raw JSON body."""

    githubkit_client: GitHubKit[Any]
    logger: Logger

    def __init__(self, githubkit_client: GitHubKit[Any] | None = None, logger: Logger | None = None):
        self.githubkit_client = githubkit_client or get_githubkit_client()
        self.logger = logger or getLogger(__name__)

    async def _perform_rest_request(
        self,
        action: str,
        *,
        method: Callable[..., Awaitable[GitHubKitResponse[Any]]],
        **request_args: Any,  # pyright: ignore[reportAny]
    ) -> Any:  # pyright: ignore[reportAny]
        """Perform a request and return the decoded JSON body.

        Raises:
            ResourceNotFoundError: If GitHub answers with a 404.
            RequestTimeoutError: If GitHub does not answer in time.
            RequestError: If the request fails for any other reason.
        """

        self.logger.info(f"Performing {action} using {method.__name__} with kwargs {request_args}")

        try:
            response: GitHubKitResponse[Any] = await method(**request_args)
        except GitHubKitRequestFailed as e:
            if e.response.status_code == NOT_FOUND_ERROR:
                self.logger.warning(f"{action}: Not found error for {e.request.url}")
                raise ResourceNotFoundError(action=action, resource=e.request.url.path) from e

            self.logger.exception(f"RequestFailed error performing {action} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e), status_code=e.response.status_code) from e
        except GitHubKitRequestTimeout as e:
            self.logger.exception(f"Timed out performing {action} with kwargs {request_args}")

            raise RequestTimeoutError(action=action) from e
        except GitHubKitGitHubException as e:
            self.logger.exception(f"Error performing {action} with kwargs {request_args}: {e}")

            raise RequestError(action=action, message=str(e)) from e

        return response.json()

    async def get_user(self, username: str) -> dict[str, Any]:
        """Get a GitHub user by login."""

        return await self._perform_rest_request(
            action="Get GitHub user",
            method=self.githubkit_client.rest.users.async_get_by_username,
            username=path_segment(username),
        )

    async def list_user_repositories(self, username: str, per_page: int = DEFAULT_REPOSITORIES_LIMIT) -> list[dict[str, Any]]:
        """List the most recently updated repositories of a GitHub user."""

        repositories = await self._perform_rest_request(
            action="List GitHub repositories",
            method=self.githubkit_client.rest.repos.async_list_for_user,
            username=path_segment(username),
            sort="updated",
            per_page=per_page,
        )

        return repositories or []

    async def list_commits(self, owner: str, repo: str, per_page: int = DEFAULT_COMMITS_LIMIT) -> list[dict[str, Any]]:
        """List the latest commits on the default branch of a repository."""

        commits = await self._perform_rest_request(
            action="List GitHub commits",
            method=self.githubkit_client.rest.repos.async_list_commits,
            owner=path_segment(owner),
            repo=path_segment(repo),
            per_page=per_page,
        )

        return commits or []
