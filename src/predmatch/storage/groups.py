"""Market group persistence."""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from predmatch.models import MarketGroup
from predmatch.storage.markets import list_markets, set_market_group

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection


def create_group(conn: DuckDBPyConnection, group: MarketGroup) -> str:
    """Insert a new group row, link its markets, return the stored group_id."""
    group_id = str(uuid.uuid4())[:12]
    conn.execute(
        "INSERT INTO market_groups (group_id, canonical_title, category, created_at) VALUES (?, ?, ?, ?)",
        [group_id, group.canonical_title, group.category, int(time.time() * 1000)],
    )
    set_market_group(conn, group.market_uids, group_id)
    return group_id


def add_to_group(conn: DuckDBPyConnection, group_id: str, group: MarketGroup) -> None:
    """Link a newly matched group's markets to an existing group."""
    set_market_group(conn, group.market_uids, group_id)


def list_groups(conn: DuckDBPyConnection) -> list[MarketGroup]:
    """All groups with their member markets (groups without members included)."""
    rows = conn.execute(
        "SELECT group_id, canonical_title, category FROM market_groups ORDER BY created_at, group_id"
    ).fetchall()
    members: dict[str, list] = {}
    for m in list_markets(conn):
        if m.group_id:
            members.setdefault(m.group_id, []).append(m)
    return [
        MarketGroup(group_id=gid, canonical_title=title, category=category, markets=members.get(gid, []))
        for gid, title, category in rows
    ]


def count_groups(conn: DuckDBPyConnection) -> int:
    return conn.execute("SELECT COUNT(*) FROM market_groups").fetchone()[0]
