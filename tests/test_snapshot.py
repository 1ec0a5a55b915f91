"""Snapshot parsing into canonical markets."""

import json
from datetime import datetime, timezone

from predmatch.ingestion import demo_markets, load_snapshot, parse_market, parse_records


def test_parse_market_fields():
    raw = {
        "id": 42,
        "question": "Will it snow in Denver?",
        "status": "ACTIVE",
        "volume": "1500.5",
        "liquidity": -20,
        "endDate": "2026-12-31T00:00:00Z",
        "outcomes": json.dumps([{"id": 1, "name": "Yes", "price": "0.3"}, {"name": "No", "price": 0.7}]),
    }
    fetched = datetime(2026, 1, 1, tzinfo=timezone.utc)
    m = parse_market(raw, "kalshi", fetched)
    assert m.uid == "kalshi:42"
    assert m.venue_name == "Kalshi"
    assert m.title == "Will it snow in Denver?"
    assert m.status == "active"
    assert m.volume == 1500.5
    assert m.liquidity == 0.0
    assert m.end_date == datetime(2026, 12, 31, tzinfo=timezone.utc)
    assert [(o.name, o.price, o.outcome_id) for o in m.outcomes] == [("Yes", 0.3, "1"), ("No", 0.7, None)]
    assert m.last_updated == fetched


def test_parse_market_tolerates_bad_values():
    m = parse_market(
        {"id": "x", "title": "T", "volume": "n/a", "endDate": "soon", "outcomes": "not json"},
        "somevenue",
    )
    assert m.volume is None
    assert m.end_date is None
    assert m.outcomes == []
    assert m.venue_name == "somevenue"


def test_parse_records_skips_incomplete_rows():
    records = {
        "polymarket": [
            {"id": "ok", "title": "Fine", "outcomes": [{"name": "Yes", "price": 0.5}]},
            {"id": "no-title", "outcomes": [{"name": "Yes", "price": 0.5}]},
            {"id": "no-outcomes", "title": "Empty"},
        ],
        "kalshi": None,
    }
    markets = parse_records(records)
    assert [m.uid for m in markets] == ["polymarket:ok"]


def test_parse_records_flat_list_needs_venue():
    rows = [
        {"venue": "manifold", "id": "a", "title": "A", "outcomes": [{"name": "Yes", "price": 0.4}]},
        {"id": "b", "title": "B", "outcomes": [{"name": "Yes", "price": 0.4}]},
    ]
    assert [m.uid for m in parse_records(rows)] == ["manifold:a"]


def test_load_snapshot_with_data_wrapper(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(
        json.dumps(
            {
                "data": [
                    {"venue": "polymarket", "id": "1", "title": "A", "outcomes": [{"name": "Yes", "price": 0.5}]},
                    {"venue": "kalshi", "id": "2", "title": "B", "outcomes": [{"name": "Yes", "price": 0.5}]},
                ]
            }
        )
    )
    markets = load_snapshot(path)
    assert [m.uid for m in markets] == ["polymarket:1", "kalshi:2"]


def test_demo_markets():
    markets = demo_markets()
    assert len(markets) == 14
    assert {m.venue for m in markets} == {"polymarket", "kalshi", "manifold"}
    assert len({m.uid for m in markets}) == 14
    assert all(m.outcomes and m.title for m in markets)


def test_parse_records_ignores_malformed_rows():
    records = {
        "polymarket": ["not-a-record", 7, {"id": "ok", "title": "Fine", "outcomes": [{"name": "Yes", "price": 0.5}]}],
        "kalshi": "oops",
        "manifold": 3,
    }
    assert [m.uid for m in parse_records(records)] == ["polymarket:ok"]
    assert parse_records("garbage") == []


def test_load_snapshot_malformed_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"polymarket": ["x", None]}))
    assert load_snapshot(path) == []
