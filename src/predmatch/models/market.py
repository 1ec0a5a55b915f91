"""Market, Outcome - canonical venue-agnostic entities."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Outcome(BaseModel):
    """Single priced outcome (Yes/No, candidate name, ...) of a market.

    Price is read as a probability but is not range-checked; detectors must cope
    with venues that publish values outside [0, 1].
    """

    name: str
    price: float
    volume: float | None = None
    outcome_id: str | None = None


class Market(BaseModel):
    """Canonical market. Unique per (venue, market_id)."""

    market_id: str
    venue: str
    venue_name: str | None = None
    title: str = ""
    description: str | None = None
    category: str | None = None
    status: str = "active"
    url: str | None = None
    volume: float | None = None
    liquidity: float | None = None
    end_date: datetime | None = None
    outcomes: list[Outcome] = Field(default_factory=list)
    last_updated: datetime | None = None
    group_id: str | None = None

    @property
    def uid(self) -> str:
        return f"{self.venue}:{self.market_id}"

    @property
    def display_venue(self) -> str:
        return self.venue_name or self.venue

    @property
    def active(self) -> bool:
        return self.status == "active"

    @property
    def popularity(self) -> float:
        """volume + 2 * liquidity; missing values count as 0."""
        return (self.volume or 0.0) + (self.liquidity or 0.0) * 2
