from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Confidence = Literal["High", "Medium"]


class Quote(BaseModel):
    """A fabricated stock quote."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str = Field(description="The ticker symbol.")
    name: str = Field(description="The display name of the company.")
    price: float = Field(description="The last price.")
    change: float = Field(description="The absolute change since the previous close.")
    changes_percentage: float = Field(
        description="The percent change since the previous close.",
        validation_alias="changesPercentage",
    )


class PricePoint(BaseModel):
    """One point on a price chart."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The label of the point on the chart, usually a weekday.")
    price: float = Field(description="The price at this point.")
    date: str | None = Field(default=None, description="The calendar date of the point.")
    volume: int | None = Field(default=None, description="The traded volume.")
    predicted: bool = Field(default=False, description="Whether the point is a synthetic prediction.")
    confidence: Confidence | None = Field(default=None, description="The confidence label of a predicted point.")
