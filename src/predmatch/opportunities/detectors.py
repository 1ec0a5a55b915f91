"""Opportunity detectors - cross-venue divergence, internal sanity, arbitrage.

Each detector takes a group and its aligned outcomes and returns at most one
finding. Groups handed in may hold several markets of one venue (loose merges
happen outside the matcher), so venue checks are done per price, not assumed.
"""

from __future__ import annotations

import math

import structlog

from predmatch.config.engine import DEFAULT_ENGINE_CONFIG, EngineConfig
from predmatch.models import (
    ArbitrageDetails,
    ArbitrageInfo,
    DetectedOpportunity,
    DivergenceDetails,
    MarketGroup,
    OutcomeComparison,
    SanityDetails,
    SanityIssue,
)
from predmatch.opportunities.align import align_outcomes

log = structlog.get_logger(__name__)

Comparisons = dict[str, OutcomeComparison]

# Price arithmetic is rounded to this many places before threshold checks,
# so a 0.03 spread computed as 0.0299999... still counts as 0.03.
PRICE_PRECISION = 9


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def detect_cross_venue_divergence(
    group: MarketGroup,
    comparisons: Comparisons,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DetectedOpportunity | None:
    """Same outcome priced apart by at least divergence_spread_floor across markets."""
    if len(group.markets) < 2:
        return None
    significant = [
        c
        for c in comparisons.values()
        if c.contributors >= 2 and round(c.spread, PRICE_PRECISION) >= config.divergence_spread_floor
    ]
    if not significant:
        return None
    significant.sort(key=lambda c: c.spread, reverse=True)
    top = significant[0]

    avg_liquidity = group.avg_liquidity
    spread_score = min(top.spread * 100, 30.0)
    liquidity_score = min(math.log10(max(avg_liquidity, 0.0) + 1) * 5, 30.0)
    venue_score = min((len(group.venues) - 1) * 10, 20.0)

    venues = ", ".join(_unique([m.display_venue for m in group.markets]))
    return DetectedOpportunity(
        group_id=group.group_id,
        type="cross_venue_divergence",
        score=spread_score + liquidity_score + venue_score,
        spread=top.spread,
        description=f"{top.outcome_name}: {top.spread * 100:.1f}% spread across {venues}",
        details=DivergenceDetails(outcome_comparisons=significant),
        avg_liquidity=avg_liquidity,
    )


def detect_internal_sanity(
    group: MarketGroup,
    comparisons: Comparisons,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DetectedOpportunity | None:
    """Markets whose outcome prices do not sum to 1 within sanity_tolerance.

    Binary and multi-outcome markets get the same check.
    """
    issues: list[SanityIssue] = []
    for market in group.markets:
        outcome_sum = sum(o.price for o in market.outcomes)
        if round(abs(outcome_sum - 1), PRICE_PRECISION) <= config.sanity_tolerance:
            continue
        direction = "exceeds" if outcome_sum > 1 else "below"
        issues.append(
            SanityIssue(
                market_uid=market.uid,
                venue=market.venue,
                venue_name=market.display_venue,
                direction=direction,
                issue=f"Outcome prices {direction} 100%: {outcome_sum * 100:.1f}%",
                outcome_sum=outcome_sum,
            )
        )
    if not issues:
        return None

    max_deviation = max(abs(i.outcome_sum - 1) for i in issues)
    score = min(max_deviation * 100, 40.0) + min(len(issues) * 10, 30.0)
    return DetectedOpportunity(
        group_id=group.group_id,
        type="internal_sanity",
        score=score,
        spread=max_deviation,
        description=f"{len(issues)} market(s) with outcome prices not summing to 100%",
        details=SanityDetails(sanity_issues=issues),
        avg_liquidity=group.avg_liquidity,
    )


def _beats(kind: str, profit: float, best: ArbitrageInfo | None) -> bool:
    if best is None:
        return True
    if kind != best.kind:
        return kind == "guaranteed_profit"
    return profit > best.profit


def detect_arbitrage(
    group: MarketGroup,
    comparisons: Comparisons,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DetectedOpportunity | None:
    """Yes on one venue plus No on another for less than (or nearly) the payout of 1."""
    if len(group.markets) < 2:
        return None
    yes, no = comparisons.get("yes"), comparisons.get("no")
    if yes is None or no is None or yes.contributors < 2 or no.contributors < 2:
        return None

    best: ArbitrageInfo | None = None
    for y in yes.prices:
        for n in no.prices:
            if y.venue == n.venue:
                continue
            total_cost = y.price + n.price
            profit = round(1 - total_cost, PRICE_PRECISION)
            if profit > 0:
                kind = "guaranteed_profit"
            elif profit > config.near_arbitrage_floor:
                kind = "near_arbitrage"
            else:
                continue
            if not _beats(kind, profit, best):
                continue
            best = ArbitrageInfo(
                kind=kind,
                yes_venue=y.venue,
                no_venue=n.venue,
                yes_price=y.price,
                no_price=n.price,
                total_cost=total_cost,
                profit=profit,
                profit_percent=profit / total_cost * 100 if total_cost > 0 else 0.0,
                legs=f"Buy Yes @ {y.venue_name}, Buy No @ {n.venue_name}",
            )
    if best is None:
        return None

    if best.kind == "guaranteed_profit":
        score = 80 + best.profit_percent * 2
        description = f"Arbitrage: {best.profit_percent:.1f}% guaranteed profit"
    else:
        score = 40 + max(0.0, best.profit_percent + 2) * 10
        description = f"Near-arbitrage: {best.total_cost * 100:.1f}% total cost"
    return DetectedOpportunity(
        group_id=group.group_id,
        type="arbitrage",
        score=score,
        spread=abs(best.profit),
        description=description,
        details=ArbitrageDetails(arbitrage_info=best),
        avg_liquidity=group.avg_liquidity,
    )


DETECTORS = (detect_cross_venue_divergence, detect_internal_sanity, detect_arbitrage)


def detect_opportunities(
    group: MarketGroup,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[DetectedOpportunity]:
    """Align outcomes once and run every detector. Zero to three findings."""
    comparisons = align_outcomes(group.markets)
    found = [f for f in (d(group, comparisons, config) for d in DETECTORS) if f is not None]
    if found:
        log.debug("opportunities_detected", group_id=group.group_id, types=[f.type for f in found])
    return found
