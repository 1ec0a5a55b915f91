"""Venue market records (JSON snapshot) -> canonical Market list."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from predmatch.models import Market, Outcome

log = structlog.get_logger(__name__)

VENUE_INFO: dict[str, dict[str, str]] = {
    "polymarket": {"name": "Polymarket", "url": "https://polymarket.com"},
    "kalshi": {"name": "Kalshi", "url": "https://kalshi.com"},
    "manifold": {"name": "Manifold", "url": "https://manifold.markets"},
}


def venue_name(venue: str) -> str:
    return VENUE_INFO.get(venue, {}).get("name", venue)


def _float(s: str | float | None) -> float:
    if s is None:
        return 0.0
    try:
        return float(s)
    except (TypeError, ValueError):
        return 0.0


def _optional_amount(s: str | float | None) -> float | None:
    """Volume/liquidity: None when absent or unparseable, never negative."""
    if s is None or s == "":
        return None
    try:
        return max(float(s), 0.0)
    except (TypeError, ValueError):
        return None


def _parse_date(s: str | None) -> datetime | None:
    if not s:
        return None
    try:
        ts = datetime.fromisoformat(str(s).replace("Z", "+00:00"))
    except ValueError:
        return None
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def _parse_outcomes(raw_outcomes: list[Any] | str | None) -> list[Outcome]:
    """Build Outcome list; accepts a list or a JSON-encoded list of {id, name, price, volume}."""
    if isinstance(raw_outcomes, str):
        try:
            raw_outcomes = json.loads(raw_outcomes)
        except (json.JSONDecodeError, TypeError):
            raw_outcomes = []
    outcomes = []
    for o in raw_outcomes or []:
        if not isinstance(o, dict) or not o.get("name"):
            continue
        outcomes.append(
            Outcome(
                name=str(o["name"]),
                price=_float(o.get("price")),
                volume=_optional_amount(o.get("volume")),
                outcome_id=str(o["id"]) if o.get("id") is not None else None,
            )
        )
    return outcomes


def parse_market(raw: dict[str, Any], venue: str, fetched_at: datetime | None = None) -> Market:
    """Convert a venue market record to canonical Market."""
    return Market(
        market_id=str(raw.get("id") or raw.get("market_id") or ""),
        venue=venue,
        venue_name=venue_name(venue),
        title=str(raw.get("title") or raw.get("question") or ""),
        description=raw.get("description"),
        category=raw.get("category") or None,
        status=str(raw.get("status") or "active").lower(),
        url=raw.get("url") or None,
        volume=_optional_amount(raw.get("volume")),
        liquidity=_optional_amount(raw.get("liquidity")),
        end_date=_parse_date(raw.get("endDate") or raw.get("end_date")),
        outcomes=_parse_outcomes(raw.get("outcomes")),
        last_updated=fetched_at or datetime.now(timezone.utc),
    )


def parse_records(records: dict[str, list[dict[str, Any]]] | list[dict[str, Any]]) -> list[Market]:
    """Parse {venue: [records]} or [records carrying "venue"]. Skips untitled or outcome-less rows."""
    if isinstance(records, dict):
        rows = [
            (venue, r)
            for venue, rs in records.items()
            if isinstance(rs, list)
            for r in rs
            if isinstance(r, dict)
        ]
    elif isinstance(records, list):
        rows = [(str(r.get("venue") or ""), r) for r in records if isinstance(r, dict)]
    else:
        log.warning("skip_snapshot", error=f"expected object or list, got {type(records).__name__}")
        return []
    fetched_at = datetime.now(timezone.utc)
    markets = []
    for venue, row in rows:
        if not venue:
            log.warning("skip_market", market_id=row.get("id"), error="missing venue")
            continue
        try:
            market = parse_market(row, venue, fetched_at)
        except Exception as e:
            log.warning("skip_market", venue=venue, market_id=row.get("id"), error=str(e))
            continue
        if not market.market_id or not market.title or not market.outcomes:
            log.debug("skip_incomplete_market", venue=venue, market_id=market.market_id)
            continue
        markets.append(market)
    return markets


def load_snapshot(path: str | Path) -> list[Market]:
    """Read a JSON snapshot file and return canonical markets."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        data = data["data"]
    markets = parse_records(data)
    log.info("snapshot_loaded", path=str(path), markets=len(markets))
    return markets
