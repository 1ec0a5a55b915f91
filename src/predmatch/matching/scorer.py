"""Pairwise match scoring - decides whether two listings on different venues are the same question."""

from __future__ import annotations

import structlog

from predmatch.config.engine import DEFAULT_ENGINE_CONFIG, EngineConfig
from predmatch.matching.text import extract_entities, extract_years, title_similarity
from predmatch.models import Market, MatchCandidate

log = structlog.get_logger(__name__)

SIMILARITY_WEIGHT = 50.0
ENTITY_POINTS = 10.0
ENTITY_CAP = 30.0
YEAR_BONUS = 10.0


def score_titles(
    title_a: str,
    title_b: str,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> tuple[float, list[str]] | None:
    """Score two titles. Returns (score, reasons) or None if any gate rejects."""
    similarity = title_similarity(title_a, title_b)
    if similarity < config.title_similarity_floor:
        return None
    score = similarity * SIMILARITY_WEIGHT
    reasons = [f"Title similarity: {similarity * 100:.0f}%"]

    entities_a = extract_entities(title_a)
    entities_b = extract_entities(title_b)
    common = entities_a & entities_b
    # Disagreement only counts when both sides carry entities.
    if entities_a and entities_b and not common:
        return None
    if common:
        score += min(len(common) * ENTITY_POINTS, ENTITY_CAP)
        reasons.append(f"Common entities: {', '.join(sorted(common))}")

    common_years = extract_years(title_a) & extract_years(title_b)
    if common_years:
        score += YEAR_BONUS
        reasons.append(f"Same year: {', '.join(sorted(common_years))}")

    if score < config.match_score_floor:
        return None
    return score, reasons


def score_pair(
    market_a: Market,
    market_b: Market,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> MatchCandidate | None:
    """Match candidate for two markets, or None (same venue or below a gate)."""
    if market_a.venue == market_b.venue:
        return None
    result = score_titles(market_a.title, market_b.title, config)
    if result is None:
        return None
    score, reasons = result
    return MatchCandidate(market_a=market_a, market_b=market_b, score=score, reasons=reasons)


def find_all_matches(
    markets: list[Market],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[MatchCandidate]:
    """Score every pair (i < j). Sorted by score desc; ties keep scan order."""
    matches: list[MatchCandidate] = []
    for i in range(len(markets)):
        for j in range(i + 1, len(markets)):
            candidate = score_pair(markets[i], markets[j], config)
            if candidate is not None:
                matches.append(candidate)
    matches.sort(key=lambda c: c.score, reverse=True)
    log.debug("pairwise_scan_done", markets=len(markets), candidates=len(matches))
    return matches
