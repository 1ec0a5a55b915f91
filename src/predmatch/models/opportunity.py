"""DetectedOpportunity and its per-detector detail payloads (tagged union on `type`)."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

OpportunityType = Literal["cross_venue_divergence", "internal_sanity", "arbitrage"]


class VenuePrice(BaseModel):
    """One venue's price for an aligned outcome."""

    venue: str
    venue_name: str
    market_uid: str
    price: float
    market_url: str | None = None


class OutcomeComparison(BaseModel):
    """Prices quoted for the same normalized outcome name across a group."""

    key: str
    outcome_name: str
    prices: list[VenuePrice] = Field(default_factory=list)
    spread: float = 0.0
    relative_spread: float = 0.0  # spread / min price, 0 when min price is 0

    @property
    def contributors(self) -> int:
        """Number of distinct markets quoting this outcome."""
        return len({p.market_uid for p in self.prices})


class SanityIssue(BaseModel):
    market_uid: str
    venue: str
    venue_name: str
    direction: Literal["exceeds", "below"]
    issue: str
    outcome_sum: float


class ArbitrageInfo(BaseModel):
    kind: Literal["guaranteed_profit", "near_arbitrage"]
    yes_venue: str
    no_venue: str
    yes_price: float
    no_price: float
    total_cost: float
    profit: float
    profit_percent: float
    legs: str


class DivergenceDetails(BaseModel):
    type: Literal["cross_venue_divergence"] = "cross_venue_divergence"
    outcome_comparisons: list[OutcomeComparison] = Field(default_factory=list)


class SanityDetails(BaseModel):
    type: Literal["internal_sanity"] = "internal_sanity"
    sanity_issues: list[SanityIssue] = Field(default_factory=list)


class ArbitrageDetails(BaseModel):
    type: Literal["arbitrage"] = "arbitrage"
    arbitrage_info: ArbitrageInfo


OpportunityDetails = Annotated[
    Union[DivergenceDetails, SanityDetails, ArbitrageDetails],
    Field(discriminator="type"),
]


class DetectedOpportunity(BaseModel):
    """One finding for a group. Created fresh on every detection pass."""

    group_id: str
    type: OpportunityType
    score: float
    spread: float
    description: str
    details: OpportunityDetails
    avg_liquidity: float = 0.0

    def to_payload(self) -> dict[str, Any]:
        """Serializable payload: {type, score, spread, description, details, avg_liquidity}."""
        return self.model_dump(mode="json", exclude={"group_id"})
