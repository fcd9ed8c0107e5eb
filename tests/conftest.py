from collections.abc import AsyncGenerator, Sequence
from json import dumps
from typing import Any, overload

import httpx
import pytest
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import StructuredLoggingMiddleware
from githubkit.github import GitHub
from pydantic import BaseModel
from starlette.applications import Starlette

from devsignal.clients.github import GitHubProxyClient, get_githubkit_client
from devsignal.clients.gitlab import GitLabProxyClient, get_httpx_client
from devsignal.proxy.app import create_http_app
from devsignal.proxy.routes import ProxyServer

GITHUB_HOST = "api.github.com"
GITLAB_HOST = "gitlab.com"

# Upstream fixtures


class FakeUpstream:
    """Serves canned upstream responses through an `httpx.MockTransport` and records every request it receives."""

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], tuple[int, Any] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def respond(self, host: str, path: str, json: Any = None, status_code: int = 200) -> None:  # pyright: ignore[reportAny]
        self.responses[(host, path)] = (status_code, json)

    def fail(self, host: str, path: str, exception: Exception) -> None:
        self.responses[(host, path)] = exception

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        response = self.responses.get((request.url.host, request.url.path))

        if response is None:
            return httpx.Response(status_code=404, json={"message": "Not Found"})

        if isinstance(response, httpx.RequestError):
            response.request = request

        if isinstance(response, Exception):
            raise response

        status_code, body = response

        return httpx.Response(status_code=status_code, content=dumps(body).encode(), headers={"Content-Type": "application/json"})

    def paths(self, host: str) -> list[str]:
        return [request.url.path for request in self.requests if request.url.host == host]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def connect_timeout() -> httpx.ConnectTimeout:
    return httpx.ConnectTimeout("timed out")


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def githubkit_client(upstream: FakeUpstream) -> GitHub[Any]:
    return get_githubkit_client(async_transport=upstream.transport)


@pytest.fixture
def github_proxy_client(githubkit_client: GitHub[Any]) -> GitHubProxyClient:
    return GitHubProxyClient(githubkit_client=githubkit_client)


@pytest.fixture
async def gitlab_proxy_client(upstream: FakeUpstream) -> AsyncGenerator[GitLabProxyClient, Any]:
    gitlab_proxy_client = GitLabProxyClient(httpx_client=get_httpx_client(transport=upstream.transport))

    yield gitlab_proxy_client

    await gitlab_proxy_client.aclose()


# Server fixtures


@pytest.fixture
def logging_middleware() -> StructuredLoggingMiddleware:
    return StructuredLoggingMiddleware(include_payloads=True)


@pytest.fixture
def fastmcp(logging_middleware: StructuredLoggingMiddleware) -> FastMCP[Any]:
    return FastMCP(name="DevSignal", middleware=[logging_middleware])


@pytest.fixture
def proxy_server(github_proxy_client: GitHubProxyClient, gitlab_proxy_client: GitLabProxyClient) -> ProxyServer:
    return ProxyServer(github_client=github_proxy_client, gitlab_client=gitlab_proxy_client)


@pytest.fixture
def proxy_app(fastmcp: FastMCP[Any], proxy_server: ProxyServer) -> Starlette:
    return create_http_app(fastmcp=proxy_server.register_routes(fastmcp=fastmcp))


@pytest.fixture
async def proxy_http_client(proxy_app: Starlette) -> AsyncGenerator[httpx.AsyncClient, Any]:
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=proxy_app), base_url="http://testserver") as http_client:
        yield http_client


# Upstream payloads


def github_user_payload(login: str = "octocat") -> dict[str, Any]:
    return {
        "login": login,
        "id": 583231,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": f"https://github.com/{login}",
        "name": "The Octocat",
        "bio": None,
        "public_repos": 8,
        "followers": 17000,
        "following": 9,
    }


def github_repository_payload(name: str = "hello-world", owner: str = "octocat", repository_id: int = 1296269) -> dict[str, Any]:
    return {
        "id": repository_id,
        "name": name,
        "owner": {"login": owner},
        "description": "My first repository on GitHub!",
        "stargazers_count": 2500,
        "forks_count": 2000,
        "language": "Python",
        "updated_at": "2024-03-01T12:00:00Z",
        "html_url": f"https://github.com/{owner}/{name}",
    }


def github_commit_payload(sha: str = "7fd1a60b01f91b314f59955a4e4d4e80d8edf11d", message: str = "Merge pull request #6") -> dict[str, Any]:
    return {
        "sha": sha,
        "commit": {"message": message, "author": {"name": "The Octocat", "date": "2012-03-06T23:06:50Z"}},
    }


def gitlab_user_payload(username: str = "gitlab-user", user_id: int = 42) -> dict[str, Any]:
    return {
        "id": user_id,
        "username": username,
        "name": "GitLab User",
        "state": "active",
        "avatar_url": "https://gitlab.com/uploads/-/system/user/avatar/42/avatar.png",
        "web_url": f"https://gitlab.com/{username}",
    }


def gitlab_project_payload(name: str = "pipeline", project_id: int = 278964, namespace: str = "gitlab-user") -> dict[str, Any]:
    return {
        "id": project_id,
        "name": name,
        "namespace": {"path": namespace},
        "description": "A pipeline",
        "star_count": 12,
        "forks_count": 3,
        "last_activity_at": "2024-02-10T08:15:00.000Z",
        "web_url": f"https://gitlab.com/{namespace}/{name}",
    }


def gitlab_commit_payload(commit_id: str = "ed899a2f4b50b4370feeea94676502b42383c746", title: str = "Replace sanitize with escape once") -> dict[str, Any]:
    return {
        "id": commit_id,
        "title": title,
        "message": f"{title}\n",
        "committed_date": "2024-02-09T10:00:00.000Z",
    }


# Snapshot helpers


def handle_exclude_keys(dictionary: dict[str, Any], exclude_keys: list[str] | None = None) -> dict[str, Any]:
    if exclude_keys is None:
        return dictionary
    return {key: value for key, value in dictionary.items() if key not in exclude_keys}


@overload
def dump_for_snapshot(
    basemodel: None,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> None: ...


@overload
def dump_for_snapshot(
    basemodel: BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any]: ...


def dump_for_snapshot(
    basemodel: None | BaseModel,
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> dict[str, Any] | None:
    if basemodel is None:
        return None

    return handle_exclude_keys(basemodel.model_dump(exclude_none=exclude_none, **dump_kwargs), exclude_keys)


def dump_list_for_snapshot(
    basemodel: None | Sequence[BaseModel],
    /,
    exclude_keys: list[str] | None = None,
    exclude_none: bool = True,
    **dump_kwargs: Any,
) -> list[dict[str, Any]] | None:
    if basemodel is None:
        return []

    return [dump_for_snapshot(item, exclude_keys, exclude_none, **dump_kwargs) for item in basemodel]
