"""Venue, market and outcome persistence."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from predmatch.models import Market, Outcome

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

MARKET_COLUMNS = [
    "uid", "market_id", "venue", "title", "description", "category", "status",
    "url", "volume", "liquidity", "end_date", "last_updated", "group_id",
]


def to_ms(ts: datetime | None) -> int | None:
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return int(ts.timestamp() * 1000)


def from_ms(ms: int | None) -> datetime | None:
    if ms is None:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def upsert_venues(conn: DuckDBPyConnection, venues: dict[str, dict[str, str]]) -> None:
    for venue_id, info in venues.items():
        conn.execute(
            """
            INSERT INTO venues (venue_id, name, url) VALUES (?, ?, ?)
            ON CONFLICT (venue_id) DO UPDATE SET name = excluded.name, url = excluded.url
            """,
            [venue_id, info.get("name", venue_id), info.get("url")],
        )


def venue_names(conn: DuckDBPyConnection) -> dict[str, str]:
    return {r[0]: r[1] for r in conn.execute("SELECT venue_id, name FROM venues").fetchall()}


def upsert_market(conn: DuckDBPyConnection, market: Market) -> None:
    """Insert or update a market and its outcomes. An existing group_id is kept."""
    now_ms = int(time.time() * 1000)
    conn.execute(
        """
        INSERT INTO markets (uid, market_id, venue, title, description, category, status, url,
                             volume, liquidity, end_date, last_updated)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT (uid) DO UPDATE SET
            title = excluded.title,
            description = excluded.description,
            category = excluded.category,
            status = excluded.status,
            url = excluded.url,
            volume = excluded.volume,
            liquidity = excluded.liquidity,
            end_date = excluded.end_date,
            last_updated = excluded.last_updated
        """,
        [
            market.uid,
            market.market_id,
            market.venue,
            market.title,
            market.description,
            market.category,
            market.status,
            market.url,
            market.volume,
            market.liquidity,
            to_ms(market.end_date),
            to_ms(market.last_updated) or now_ms,
        ],
    )
    # Outcomes dropped or renamed by the venue since the last fetch.
    names = [o.name for o in market.outcomes]
    if names:
        conn.execute(
            f"DELETE FROM outcomes WHERE market_uid = ? AND name NOT IN ({', '.join('?' for _ in names)})",
            [market.uid, *names],
        )
    else:
        conn.execute("DELETE FROM outcomes WHERE market_uid = ?", [market.uid])
    for position, outcome in enumerate(market.outcomes):
        conn.execute(
            """
            INSERT INTO outcomes (market_uid, name, position, outcome_id, price, volume, last_updated)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (market_uid, name) DO UPDATE SET
                position = excluded.position,
                price = excluded.price,
                volume = excluded.volume,
                last_updated = excluded.last_updated
            """,
            [market.uid, outcome.name, position, outcome.outcome_id, outcome.price, outcome.volume, now_ms],
        )


def upsert_markets(conn: DuckDBPyConnection, markets: list[Market]) -> None:
    """Upsert multiple markets."""
    for m in markets:
        upsert_market(conn, m)


def _load_outcomes(conn: DuckDBPyConnection) -> dict[str, list[Outcome]]:
    rows = conn.execute(
        "SELECT market_uid, name, price, volume, outcome_id FROM outcomes ORDER BY market_uid, position"
    ).fetchall()
    out: dict[str, list[Outcome]] = {}
    for uid, name, price, volume, outcome_id in rows:
        out.setdefault(uid, []).append(
            Outcome(name=name, price=price, volume=volume, outcome_id=outcome_id)
        )
    return out


def _row_to_market(row: tuple, outcomes: dict[str, list[Outcome]], names: dict[str, str]) -> Market:
    r = dict(zip(MARKET_COLUMNS, row))
    return Market(
        market_id=r["market_id"],
        venue=r["venue"],
        venue_name=names.get(r["venue"]),
        title=r["title"],
        description=r["description"],
        category=r["category"],
        status=r["status"],
        url=r["url"],
        volume=r["volume"],
        liquidity=r["liquidity"],
        end_date=from_ms(r["end_date"]),
        last_updated=from_ms(r["last_updated"]),
        group_id=r["group_id"],
        outcomes=outcomes.get(r["uid"], []),
    )


def list_markets(
    conn: DuckDBPyConnection,
    ungrouped_only: bool = False,
    active_only: bool = False,
) -> list[Market]:
    """Markets with outcomes, ordered by venue then market_id."""
    where = []
    if ungrouped_only:
        where.append("group_id IS NULL")
    if active_only:
        where.append("status = 'active'")
    sql = f"SELECT {', '.join(MARKET_COLUMNS)} FROM markets"
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY venue, market_id"
    rows = conn.execute(sql).fetchall()
    outcomes = _load_outcomes(conn)
    names = venue_names(conn)
    return [_row_to_market(r, outcomes, names) for r in rows]


def set_market_group(conn: DuckDBPyConnection, market_uids: list[str], group_id: str) -> None:
    for uid in market_uids:
        conn.execute("UPDATE markets SET group_id = ? WHERE uid = ?", [group_id, uid])


def count_markets(conn: DuckDBPyConnection) -> int:
    return conn.execute("SELECT COUNT(*) FROM markets").fetchone()[0]
