"""Canonical schema (Pydantic) - Market, Outcome, MarketGroup, DetectedOpportunity."""

from predmatch.models.group import MarketGroup, MatchCandidate
from predmatch.models.market import Market, Outcome
from predmatch.models.opportunity import (
    ArbitrageDetails,
    ArbitrageInfo,
    DetectedOpportunity,
    DivergenceDetails,
    OutcomeComparison,
    SanityDetails,
    SanityIssue,
    VenuePrice,
)

__all__ = [
    "Market",
    "Outcome",
    "MatchCandidate",
    "MarketGroup",
    "OutcomeComparison",
    "VenuePrice",
    "SanityIssue",
    "ArbitrageInfo",
    "DivergenceDetails",
    "SanityDetails",
    "ArbitrageDetails",
    "DetectedOpportunity",
]
