from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field

Provider = Literal["github", "gitlab"]


def _count(value: Any) -> int:  # pyright: ignore[reportAny]
    return value if isinstance(value, int) and value >= 0 else 0


class DeveloperProfile(BaseModel):
    """A GitHub or GitLab user."""

    model_config = ConfigDict(frozen=True)

    provider: Provider = Field(description="The code hosting provider of the profile.")
    id: int | None = Field(default=None, description="The provider's numeric id of the user.")
    username: str = Field(description="The login of the user.")
    name: str | None = Field(default=None, description="The display name of the user.")
    avatar_url: str | None = Field(default=None, description="The URL of the user's avatar.")
    web_url: str | None = Field(default=None, description="The URL of the user's profile page.")
    bio: str | None = Field(default=None, description="The biography of the user.")
    project_count: int = Field(default=0, description="The number of public repositories or projects.")
    followers: int | None = Field(default=None, description="The number of followers. Only reported by GitHub.")
    following: int | None = Field(default=None, description="The number of followed users. Only reported by GitHub.")

    @classmethod
    def from_github_user(cls, user: dict[str, Any]) -> Self:
        return cls(
            provider="github",
            id=user.get("id"),
            username=user.get("login") or "",
            name=user.get("name"),
            avatar_url=user.get("avatar_url"),
            web_url=user.get("html_url"),
            bio=user.get("bio"),
            project_count=_count(user.get("public_repos")),
            followers=_count(user.get("followers")),
            following=_count(user.get("following")),
        )

    @classmethod
    def from_gitlab_user(cls, user: dict[str, Any], project_count: int = 0) -> Self:
        """GitLab does not report a project count on the user, so callers pass the number of projects they loaded."""
        username: str = user.get("username") or ""
        return cls(
            provider="gitlab",
            id=user.get("id"),
            username=username,
            name=user.get("name"),
            avatar_url=user.get("avatar_url"),
            web_url=user.get("web_url") or f"https://gitlab.com/{username}",
            bio=user.get("bio") or None,
            project_count=project_count,
        )


class ProjectSummary(BaseModel):
    """A GitHub repository or GitLab project."""

    model_config = ConfigDict(frozen=True)

    id: int | str = Field(description="The provider's id of the project.")
    name: str = Field(description="The name of the project.")
    owner: str | None = Field(default=None, description="The login or namespace that owns the project.")
    description: str | None = Field(default=None, description="The description of the project.")
    stars: int = Field(default=0, description="The number of stars.")
    forks: int = Field(default=0, description="The number of forks.")
    language: str | None = Field(default=None, description="The primary language. Only reported by GitHub.")
    last_activity_at: str | None = Field(default=None, description="The timestamp of the last update.")
    web_url: str | None = Field(default=None, description="The URL of the project page.")

    @classmethod
    def from_github_repository(cls, repository: dict[str, Any]) -> Self:
        owner: dict[str, Any] = repository.get("owner") or {}
        return cls(
            id=repository.get("id") or repository.get("name") or "",
            name=repository.get("name") or "",
            owner=owner.get("login"),
            description=repository.get("description"),
            stars=_count(repository.get("stargazers_count")),
            forks=_count(repository.get("forks_count")),
            language=repository.get("language"),
            last_activity_at=repository.get("updated_at"),
            web_url=repository.get("html_url"),
        )

    @classmethod
    def from_gitlab_project(cls, project: dict[str, Any]) -> Self:
        namespace: dict[str, Any] = project.get("namespace") or {}
        return cls(
            id=project.get("id") or project.get("name") or "",
            name=project.get("name") or "",
            owner=namespace.get("path"),
            description=project.get("description"),
            stars=_count(project.get("star_count")),
            forks=_count(project.get("forks_count")),
            last_activity_at=project.get("last_activity_at"),
            web_url=project.get("web_url"),
        )

    @property
    def last_activity_date(self) -> str | None:
        if not self.last_activity_at:
            return None
        return self.last_activity_at.split("T")[0]


class CommitSummary(BaseModel):
    """A single commit."""

    model_config = ConfigDict(frozen=True)

    sha: str | None = Field(default=None, description="The commit hash.")
    message: str = Field(description="The commit message, or its title for GitLab commits.")
    date: str | None = Field(default=None, description="The author or committer date.")

    @classmethod
    def from_github_commit(cls, commit: dict[str, Any]) -> Self:
        details: dict[str, Any] = commit.get("commit") or {}
        author: dict[str, Any] = details.get("author") or {}
        return cls(sha=commit.get("sha"), message=details.get("message") or "", date=author.get("date"))

    @classmethod
    def from_gitlab_commit(cls, commit: dict[str, Any]) -> Self:
        return cls(
            sha=commit.get("id"),
            message=commit.get("title") or commit.get("message") or "",
            date=commit.get("committed_date") or commit.get("authored_date") or commit.get("created_at"),
        )
