"""Shared fixtures."""

import pytest

from predmatch.models import Market, MarketGroup, Outcome


def make_market(
    market_id: str,
    venue: str,
    title: str = "Will it happen?",
    outcomes: dict[str, float] | None = None,
    volume: float | None = None,
    liquidity: float | None = None,
    category: str | None = None,
) -> Market:
    prices = {"Yes": 0.5, "No": 0.5} if outcomes is None else outcomes
    return Market(
        market_id=market_id,
        venue=venue,
        venue_name=venue.capitalize(),
        title=title,
        category=category,
        volume=volume,
        liquidity=liquidity,
        outcomes=[Outcome(name=name, price=price) for name, price in prices.items()],
    )


def make_group(*markets: Market, group_id: str = "g1") -> MarketGroup:
    return MarketGroup(group_id=group_id, canonical_title=markets[0].title if markets else "", markets=list(markets))


@pytest.fixture
def market_factory():
    return make_market


@pytest.fixture
def group_factory():
    return make_group
