from typing import Literal

from pydantic import BaseModel, Field

from devsignal.models.developer import CommitSummary, DeveloperProfile, Provider, ProjectSummary
from devsignal.models.market import PricePoint, Quote

Tab = Literal["financial", "github", "gitlab"]

TABS: tuple[Tab, ...] = ("financial", "github", "gitlab")


class ProfileCard(BaseModel):
    """Everything a developer-profile card displays."""

    profile: DeveloperProfile = Field(description="The developer's profile.")
    projects: list[ProjectSummary] = Field(description="The developer's most recently updated repositories or projects.")


class MarketOverview(BaseModel):
    quotes: list[Quote] = Field(description="The quotes shown on the financial tab.")
    mood: str = Field(description="An emoji summarizing the average percent change of the quotes.")
    warning: str | None = Field(default=None, description="Set when demo data is shown because the live data was unavailable.")


class PriceChart(BaseModel):
    symbol: str = Field(description="The ticker symbol of the chart.")
    points: list[PricePoint] = Field(description="The price history, possibly ending with a predicted point.")
    warning: str | None = Field(default=None, description="Set when demo data is shown because the live data was unavailable.")


class ProfileOverview(ProfileCard):
    warning: str | None = Field(default=None, description="Set when demo data is shown because the live data was unavailable.")


class CommitList(BaseModel):
    provider: Provider = Field(description="The code hosting provider of the project.")
    project: str = Field(description="The repository name or GitLab project id.")
    commits: list[CommitSummary] = Field(description="The latest commits of the project.")
    warning: str | None = Field(default=None, description="Set when demo data is shown because the live data was unavailable.")
