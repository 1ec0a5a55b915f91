"""Group assignment - greedy 1:1 pairing of match candidates, plus the merge into existing groups.

assign_groups is a maximal greedy matching: candidates are taken best-first and a
market is used at most once, so A-B and B-C above threshold give one pair and an
orphan, never a three-way group. Transitive (union-find) grouping is not done.
"""

from __future__ import annotations

from typing import Literal

import structlog

from predmatch.config.engine import DEFAULT_ENGINE_CONFIG, EngineConfig
from predmatch.matching.scorer import score_titles
from predmatch.models import Market, MarketGroup, MatchCandidate

log = structlog.get_logger(__name__)

MergeMode = Literal["rescore", "prefix", "none"]
MERGE_MODES = ("rescore", "prefix", "none")
PREFIX_LENGTH = 50


def canonical_title(markets: list[Market]) -> str:
    """Title of the most popular member (volume + 2 * liquidity); first wins ties."""
    if not markets:
        return ""
    return max(markets, key=lambda m: m.popularity).title


def group_category(markets: list[Market]) -> str | None:
    for m in markets:
        if m.category:
            return m.category
    return None


def build_group(markets: list[Market], group_id: str | None = None) -> MarketGroup:
    return MarketGroup(
        group_id=group_id or "+".join(m.uid for m in markets),
        canonical_title=canonical_title(markets),
        category=group_category(markets),
        markets=list(markets),
    )


def assign_groups(
    markets: list[Market],
    candidates: list[MatchCandidate],
    min_score: float = DEFAULT_ENGINE_CONFIG.group_score_floor,
) -> list[MarketGroup]:
    """Partition matched markets into disjoint two-market groups, best score first."""
    batch = {m.uid for m in markets}
    valid = [c for c in candidates if c.score >= min_score]
    valid.sort(key=lambda c: c.score, reverse=True)
    used: set[str] = set()
    groups: list[MarketGroup] = []
    for c in valid:
        uid_a, uid_b = c.market_a.uid, c.market_b.uid
        if uid_a not in batch or uid_b not in batch:
            log.debug("candidate_outside_batch", market_a=uid_a, market_b=uid_b)
            continue
        if uid_a in used or uid_b in used:
            continue
        groups.append(build_group([c.market_a, c.market_b]))
        used.add(uid_a)
        used.add(uid_b)
    log.info("groups_assigned", candidates=len(valid), groups=len(groups), orphans=len(batch - used))
    return groups


def find_merge_target(
    group: MarketGroup,
    existing: list[MarketGroup],
    mode: MergeMode = "rescore",
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> MarketGroup | None:
    """Existing group that a newly assigned group should join, if any.

    rescore: venue sets must be disjoint and the title scorer must accept both
    canonical titles; the best-scoring existing group wins.
    prefix: first existing group whose canonical title contains the first 50
    characters of the new one. Looser; may put two markets of one venue together.
    none: never merge.
    """
    if mode == "none":
        return None
    if mode == "prefix":
        prefix = group.canonical_title[:PREFIX_LENGTH]
        for candidate in existing:
            if prefix in candidate.canonical_title:
                return candidate
        return None
    if mode != "rescore":
        raise ValueError(f"unknown merge mode: {mode!r}")
    best: MarketGroup | None = None
    best_score = float("-inf")
    for candidate in existing:
        if group.venues & candidate.venues:
            continue
        result = score_titles(group.canonical_title, candidate.canonical_title, config)
        if result is not None and result[0] > best_score:
            best, best_score = candidate, result[0]
    return best
