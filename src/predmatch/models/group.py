"""MatchCandidate, MarketGroup - matching output."""

from __future__ import annotations

from pydantic import BaseModel, Field

from predmatch.models.market import Market


class MatchCandidate(BaseModel):
    """Two markets from different venues with a match score and reasons."""

    market_a: Market
    market_b: Market
    score: float
    reasons: list[str] = Field(default_factory=list)


class MarketGroup(BaseModel):
    """Markets believed to list the same question."""

    group_id: str
    canonical_title: str
    category: str | None = None
    markets: list[Market] = Field(default_factory=list)

    @property
    def market_uids(self) -> list[str]:
        return [m.uid for m in self.markets]

    @property
    def venues(self) -> set[str]:
        return {m.venue for m in self.markets}

    @property
    def avg_liquidity(self) -> float:
        if not self.markets:
            return 0.0
        return sum(m.liquidity or 0.0 for m in self.markets) / len(self.markets)
