import re

import httpx
import pytest
from inline_snapshot import snapshot

from devsignal.clients.errors.upstream import RequestError, RequestTimeoutError, ResourceNotFoundError
from devsignal.clients.github import GitHubProxyClient
from tests.conftest import (
    GITHUB_HOST,
    FakeUpstream,
    connect_timeout,
    github_commit_payload,
    github_repository_payload,
    github_user_payload,
)


def test_init():
    github_proxy_client = GitHubProxyClient()
    assert github_proxy_client is not None


class TestUsers:
    async def test_get_user(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        upstream.respond(GITHUB_HOST, "/users/octocat", json=github_user_payload())

        user = await github_proxy_client.get_user(username="octocat")

        assert user == github_user_payload()

    async def test_get_user_sends_user_agent(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        upstream.respond(GITHUB_HOST, "/users/octocat", json=github_user_payload())

        _ = await github_proxy_client.get_user(username="octocat")

        assert len(upstream.requests) == 1
        assert upstream.requests[0].headers["User-Agent"] == "DevSignal-Dashboard"

    async def test_get_user_missing(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        error_text: str = re.escape(
            "A request error occured. (action: Get GitHub user, message: The resource could not be found., resource: /users/missing)"
        )

        with pytest.raises(ResourceNotFoundError, match=error_text):
            await github_proxy_client.get_user(username="missing")

    async def test_get_user_server_error(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        upstream.respond(GITHUB_HOST, "/users/octocat", json={"message": "Server Error"}, status_code=502)

        with pytest.raises(RequestError) as e:
            await github_proxy_client.get_user(username="octocat")

        assert e.value.status_code == 502
        assert len(upstream.requests) == 1

    async def test_get_user_timeout(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        upstream.fail(GITHUB_HOST, "/users/octocat", connect_timeout())

        with pytest.raises(RequestTimeoutError):
            await github_proxy_client.get_user(username="octocat")


class TestRepositories:
    async def test_list_user_repositories(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        repositories = [github_repository_payload(), github_repository_payload(name="spoon-knife", repository_id=1300192)]
        upstream.respond(GITHUB_HOST, "/users/octocat/repos", json=repositories)

        assert await github_proxy_client.list_user_repositories(username="octocat") == repositories

        request: httpx.Request = upstream.requests[0]
        assert dict(request.url.params) == snapshot({"sort": "updated", "per_page": "10"})

    async def test_list_user_repositories_null_body(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        upstream.respond(GITHUB_HOST, "/users/octocat/repos", json=None)

        assert await github_proxy_client.list_user_repositories(username="octocat") == []


class TestCommits:
    async def test_list_commits(self, github_proxy_client: GitHubProxyClient, upstream: FakeUpstream):
        commits = [github_commit_payload()]
        upstream.respond(GITHUB_HOST, "/repos/octocat/hello-world/commits", json=commits)

        assert await github_proxy_client.list_commits(owner="octocat", repo="hello-world") == commits

        assert dict(upstream.requests[0].url.params) == snapshot({"per_page": "5"})

    async def test_list_commits_missing_repository(self, github_proxy_client: GitHubProxyClient):
        with pytest.raises(ResourceNotFoundError):
            await github_proxy_client.list_commits(owner="octocat", repo="missing")
