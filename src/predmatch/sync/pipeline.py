"""Sync pipeline - store markets, match ungrouped ones, persist groups, redetect opportunities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from predmatch.config.engine import DEFAULT_ENGINE_CONFIG, EngineConfig
from predmatch.ingestion.snapshot import VENUE_INFO
from predmatch.matching import assign_groups, find_all_matches, find_merge_target
from predmatch.matching.grouping import MERGE_MODES
from predmatch.models import DetectedOpportunity, Market, MarketGroup
from predmatch.opportunities import detect_opportunities, rank_opportunities
from predmatch.storage.groups import add_to_group, count_groups, create_group, list_groups
from predmatch.storage.markets import count_markets, list_markets, upsert_markets, upsert_venues
from predmatch.storage.opportunities import count_active, deactivate_all, insert_opportunities
from predmatch.storage.sync_log import finish_sync, last_sync, start_sync

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

log = structlog.get_logger(__name__)


@dataclass
class SyncResult:
    markets_processed: int
    groups_created: int
    opportunities_found: int
    groups_merged: int = 0


def match_batch(markets: list[Market], config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> list[MarketGroup]:
    """Pairwise scan plus greedy assignment over one in-memory batch."""
    if len(markets) < 2:
        return []
    candidates = find_all_matches(markets, config)
    return assign_groups(markets, candidates, min_score=config.group_score_floor)


def detect_batch(
    groups: list[MarketGroup],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[DetectedOpportunity]:
    """Findings for every group with at least two markets, ranked."""
    found: list[DetectedOpportunity] = []
    for group in groups:
        if len(group.markets) < 2:
            continue
        found.extend(detect_opportunities(group, config))
    return rank_opportunities(found)


def _venues_for(markets: list[Market]) -> dict[str, dict[str, str]]:
    venues = {m.venue: {"name": m.display_venue} for m in markets if m.venue not in VENUE_INFO}
    venues.update(VENUE_INFO)
    return venues


def run_matching(
    conn: DuckDBPyConnection,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    merge_mode: str = "rescore",
) -> tuple[int, int]:
    """Group active ungrouped markets. Returns (groups_created, groups_merged)."""
    markets = list_markets(conn, ungrouped_only=True, active_only=True)
    log.info("matching_start", ungrouped=len(markets))
    groups = match_batch(markets, config)
    existing = list_groups(conn)
    created = merged = 0
    for group in groups:
        target = find_merge_target(group, existing, merge_mode, config)
        if target is not None:
            add_to_group(conn, target.group_id, group)
            target.markets.extend(group.markets)
            merged += 1
            log.debug("group_merged", group_id=target.group_id, markets=group.market_uids)
            continue
        group_id = create_group(conn, group)
        existing.append(group.model_copy(update={"group_id": group_id}))
        created += 1
    log.info("matching_done", groups_created=created, groups_merged=merged)
    return created, merged


def detect_all_opportunities(conn: DuckDBPyConnection, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Deactivate every stored finding, then store a fresh detection pass over all groups."""
    groups = list_groups(conn)
    deactivate_all(conn)
    total = insert_opportunities(conn, detect_batch(groups, config))
    log.info("opportunities_detected", groups=len(groups), opportunities=total)
    return total


def run_sync(
    conn: DuckDBPyConnection,
    markets: list[Market],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    merge_mode: str = "rescore",
) -> SyncResult:
    """Full refresh cycle over a fetched batch. Failures are logged to sync_log and re-raised."""
    if merge_mode not in MERGE_MODES:
        raise ValueError(f"unknown merge mode: {merge_mode!r} (expected one of {', '.join(MERGE_MODES)})")
    sync_id = start_sync(conn)
    try:
        upsert_venues(conn, _venues_for(markets))
        upsert_markets(conn, markets)
        created, merged = run_matching(conn, config, merge_mode)
        found = detect_all_opportunities(conn, config)
    except Exception as e:
        finish_sync(conn, sync_id, "failed", error=str(e))
        log.error("sync_failed", sync_id=sync_id, error=str(e))
        raise
    finish_sync(
        conn,
        sync_id,
        "completed",
        markets_processed=len(markets),
        groups_created=created,
        opportunities_found=found,
    )
    log.info("sync_completed", sync_id=sync_id, markets=len(markets), opportunities=found)
    return SyncResult(
        markets_processed=len(markets),
        groups_created=created,
        opportunities_found=found,
        groups_merged=merged,
    )


def sync_status(conn: DuckDBPyConnection) -> dict[str, Any]:
    return {
        "last_sync": last_sync(conn),
        "stats": {
            "markets": count_markets(conn),
            "groups": count_groups(conn),
            "active_opportunities": count_active(conn),
        },
    }
