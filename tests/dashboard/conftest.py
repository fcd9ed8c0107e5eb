from typing import Any

import pytest

from devsignal.dashboard.sources import DeveloperDataSource
from tests.conftest import (
    github_commit_payload,
    github_repository_payload,
    github_user_payload,
    gitlab_commit_payload,
    gitlab_project_payload,
    gitlab_user_payload,
)


def quote_payloads() -> list[dict[str, Any]]:
    return [
        {"symbol": "NVDA", "name": "NVIDIA Corp.", "price": 880.08, "change": 45.12, "changesPercentage": 5.4},
        {"symbol": "TSLA", "name": "Tesla Inc.", "price": 175.79, "change": 3.1, "changesPercentage": 1.8},
    ]


def price_history_payloads() -> list[dict[str, Any]]:
    return [
        {"name": "Mon", "price": 100.0, "date": "2024-03-04", "volume": 1000},
        {"name": "Tue", "price": 101.5, "date": "2024-03-05", "volume": 1200},
    ]


class FakeDataSource(DeveloperDataSource):
    """An in-memory data source that answers with canned payloads and records every call."""

    def __init__(self) -> None:
        self.answers: dict[str, Any] = {
            "get_quotes": quote_payloads(),
            "get_price_history": price_history_payloads(),
            "get_github_user": github_user_payload(),
            "list_github_repositories": [github_repository_payload(), github_repository_payload(name="spoon-knife", repository_id=1300192)],
            "list_github_commits": [github_commit_payload()],
            "get_gitlab_user": gitlab_user_payload(),
            "list_gitlab_projects": [gitlab_project_payload()],
            "list_gitlab_commits": [gitlab_commit_payload()],
        }
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed: bool = False

    def fail(self, method: str, exception: Exception) -> None:
        self.failures[method] = exception

    def called(self, method: str) -> list[dict[str, Any]]:
        return [arguments for name, arguments in self.calls if name == method]

    def _answer(self, method: str, **arguments: Any) -> Any:  # pyright: ignore[reportAny]
        self.calls.append((method, arguments))

        if method in self.failures:
            raise self.failures[method]

        return self.answers[method]

    async def aclose(self) -> None:
        self.closed = True

    async def get_quotes(self) -> list[dict[str, Any]]:
        return self._answer("get_quotes")

    async def get_price_history(self, symbol: str) -> list[dict[str, Any]]:
        return self._answer("get_price_history", symbol=symbol)

    async def get_github_user(self, username: str) -> dict[str, Any]:
        return self._answer("get_github_user", username=username)

    async def list_github_repositories(self, username: str) -> list[dict[str, Any]]:
        return self._answer("list_github_repositories", username=username)

    async def list_github_commits(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return self._answer("list_github_commits", owner=owner, repo=repo)

    async def get_gitlab_user(self, username: str) -> dict[str, Any]:
        return self._answer("get_gitlab_user", username=username)

    async def list_gitlab_projects(self, user_id: int | str) -> list[dict[str, Any]]:
        return self._answer("list_gitlab_projects", user_id=user_id)

    async def list_gitlab_commits(self, project_id: int | str) -> list[dict[str, Any]]:
        return self._answer("list_gitlab_commits", project_id=project_id)


@pytest.fixture
def data_source() -> FakeDataSource:
    return FakeDataSource()
