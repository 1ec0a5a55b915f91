"""Opportunity detection over matched groups: alignment, detectors, ranking."""

from predmatch.opportunities.align import align_outcomes
from predmatch.opportunities.detectors import (
    detect_arbitrage,
    detect_cross_venue_divergence,
    detect_internal_sanity,
    detect_opportunities,
)
from predmatch.opportunities.ranking import apply_freshness_decay, rank_opportunities

__all__ = [
    "align_outcomes",
    "detect_cross_venue_divergence",
    "detect_internal_sanity",
    "detect_arbitrage",
    "detect_opportunities",
    "rank_opportunities",
    "apply_freshness_decay",
]
