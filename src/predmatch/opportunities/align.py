"""Outcome alignment - bucket outcomes of a group's markets by normalized name."""

from __future__ import annotations

from predmatch.matching.text import normalize
from predmatch.models import Market, OutcomeComparison, VenuePrice


def align_outcomes(markets: list[Market]) -> dict[str, OutcomeComparison]:
    """Map normalized outcome name -> OutcomeComparison with spread for multi-venue buckets.

    Names that still differ after normalize() land in separate buckets; prices of
    different options are never merged.
    """
    buckets: dict[str, OutcomeComparison] = {}
    for market in markets:
        for outcome in market.outcomes:
            key = normalize(outcome.name)
            if key not in buckets:
                buckets[key] = OutcomeComparison(key=key, outcome_name=outcome.name)
            buckets[key].prices.append(
                VenuePrice(
                    venue=market.venue,
                    venue_name=market.display_venue,
                    market_uid=market.uid,
                    price=outcome.price,
                    market_url=market.url,
                )
            )

    for comparison in buckets.values():
        if comparison.contributors < 2:
            continue
        prices = [p.price for p in comparison.prices]
        lo, hi = min(prices), max(prices)
        comparison.spread = hi - lo
        comparison.relative_spread = comparison.spread / lo if lo != 0 else 0.0
    return buckets
