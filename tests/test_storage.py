"""DuckDB store: markets, groups, opportunities, sync log."""

from datetime import datetime, timezone

import pytest

from predmatch.ingestion import VENUE_INFO
from predmatch.matching.grouping import build_group
from predmatch.opportunities import detect_opportunities
from predmatch.storage.db import get_connection, init_schema
from predmatch.storage.groups import add_to_group, count_groups, create_group, list_groups
from predmatch.storage.markets import (
    count_markets,
    from_ms,
    list_markets,
    to_ms,
    upsert_market,
    upsert_venues,
)
from predmatch.storage.opportunities import count_active, deactivate_all, insert_opportunities, list_active
from predmatch.storage.sync_log import finish_sync, last_sync, start_sync


@pytest.fixture
def temp_db():
    conn = get_connection(":memory:")
    init_schema(conn)
    upsert_venues(conn, VENUE_INFO)
    yield conn
    conn.close()


def test_init_schema_is_idempotent(temp_db):
    init_schema(temp_db)
    assert count_markets(temp_db) == 0


def test_ms_round_trip():
    ts = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert from_ms(to_ms(ts)) == ts
    assert to_ms(None) is None and from_ms(None) is None
    assert to_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000


def test_upsert_market_updates_and_keeps_outcome_order(temp_db, market_factory):
    m = market_factory("m1", "polymarket", "Title", outcomes={"Yes": 0.4, "No": 0.6}, volume=10)
    upsert_market(temp_db, m)
    m2 = market_factory("m1", "polymarket", "Title v2", outcomes={"Yes": 0.45, "No": 0.55}, volume=20)
    upsert_market(temp_db, m2)
    stored = list_markets(temp_db)
    assert len(stored) == 1
    assert stored[0].title == "Title v2"
    assert stored[0].volume == 20
    assert stored[0].venue_name == "Polymarket"
    assert [(o.name, o.price) for o in stored[0].outcomes] == [("Yes", 0.45), ("No", 0.55)]


def test_group_links_survive_market_refresh(temp_db, market_factory):
    a = market_factory("a", "polymarket", "A")
    b = market_factory("b", "kalshi", "B")
    c = market_factory("c", "manifold", "C")
    for m in (a, b, c):
        upsert_market(temp_db, m)
    group_id = create_group(temp_db, build_group([a, b]))
    upsert_market(temp_db, a.model_copy(update={"title": "A refreshed"}))

    assert [m.uid for m in list_markets(temp_db, ungrouped_only=True)] == ["manifold:c"]
    groups = list_groups(temp_db)
    assert len(groups) == 1
    assert groups[0].group_id == group_id
    assert sorted(groups[0].market_uids) == ["kalshi:b", "polymarket:a"]

    add_to_group(temp_db, group_id, build_group([c]))
    assert len(list_groups(temp_db)[0].markets) == 3
    assert count_groups(temp_db) == 1


def test_active_only_filter(temp_db, market_factory):
    upsert_market(temp_db, market_factory("open", "kalshi"))
    upsert_market(temp_db, market_factory("done", "kalshi").model_copy(update={"status": "closed"}))
    assert [m.market_id for m in list_markets(temp_db, active_only=True)] == ["open"]


def _store_pair(conn, market_factory):
    x = market_factory("x", "polymarket", "Pair", outcomes={"Yes": 0.45, "No": 0.55}, liquidity=500)
    y = market_factory("y", "kalshi", "Pair", outcomes={"Yes": 0.52, "No": 0.48}, liquidity=500)
    for m in (x, y):
        upsert_market(conn, m)
    group = build_group([x, y])
    group_id = create_group(conn, group)
    return detect_opportunities(group.model_copy(update={"group_id": group_id})), group_id


def test_opportunities_insert_list_and_deactivate(temp_db, market_factory):
    found, group_id = _store_pair(temp_db, market_factory)
    assert insert_opportunities(temp_db, found) == len(found) == 2
    rows = list_active(temp_db)
    assert [r["type"] for r in rows] == ["arbitrage", "cross_venue_divergence"]
    assert rows[0]["group_id"] == group_id
    assert rows[0]["details"]["type"] == "arbitrage"
    assert rows[0]["details"]["arbitrage_info"]["kind"] == "guaranteed_profit"

    assert [r["type"] for r in list_active(temp_db, type="cross_venue_divergence")] == ["cross_venue_divergence"]
    assert list_active(temp_db, min_score=90)[0]["type"] == "arbitrage"
    assert list_active(temp_db, venue="manifold") == []
    assert len(list_active(temp_db, venue="kalshi")) == 2
    assert len(list_active(temp_db, limit=1, offset=1)) == 1

    deactivate_all(temp_db)
    assert count_active(temp_db) == 0
    assert list_active(temp_db) == []


def test_sync_log(temp_db):
    assert last_sync(temp_db) is None
    first = start_sync(temp_db)
    finish_sync(temp_db, first, "completed", markets_processed=3, groups_created=1, opportunities_found=2)
    second = start_sync(temp_db)
    assert second > first
    finish_sync(temp_db, second, "failed", error="boom")
    last = last_sync(temp_db)
    assert last["id"] == second
    assert last["status"] == "failed"
    assert last["error"] == "boom"
    assert last["ended_at"] is not None


def test_schema_creates_all_tables():
    conn = get_connection(":memory:")
    try:
        init_schema(conn)
        tables = {r[0] for r in conn.execute("SELECT table_name FROM information_schema.tables").fetchall()}
    finally:
        conn.close()
    assert {"venues", "markets", "outcomes", "market_groups", "opportunities", "sync_log"} <= tables


def test_refresh_drops_outcomes_no_longer_listed(temp_db, market_factory):
    upsert_market(temp_db, market_factory("nom", "kalshi", "Nominee", outcomes={"Vance": 0.5, "Rubio": 0.5}))
    upsert_market(temp_db, market_factory("nom", "kalshi", "Nominee", outcomes={"Vance": 0.6, "DeSantis": 0.4}))
    stored = list_markets(temp_db)[0]
    assert [(o.name, o.price) for o in stored.outcomes] == [("Vance", 0.6), ("DeSantis", 0.4)]

    upsert_market(temp_db, market_factory("nom", "kalshi", "Nominee", outcomes={}))
    assert list_markets(temp_db)[0].outcomes == []
