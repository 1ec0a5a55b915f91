"""Sync run log."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

COLUMNS = ["id", "started_at", "ended_at", "status", "markets_processed", "groups_created", "opportunities_found", "error"]


def start_sync(conn: DuckDBPyConnection) -> int:
    row = conn.execute(
        "INSERT INTO sync_log (started_at, status) VALUES (?, 'running') RETURNING id",
        [int(time.time() * 1000)],
    ).fetchone()
    return row[0]


def finish_sync(
    conn: DuckDBPyConnection,
    sync_id: int,
    status: str,
    markets_processed: int = 0,
    groups_created: int = 0,
    opportunities_found: int = 0,
    error: str | None = None,
) -> None:
    conn.execute(
        """
        UPDATE sync_log SET ended_at = ?, status = ?, markets_processed = ?, groups_created = ?,
            opportunities_found = ?, error = ?
        WHERE id = ?
        """,
        [int(time.time() * 1000), status, markets_processed, groups_created, opportunities_found, error, sync_id],
    )


def last_sync(conn: DuckDBPyConnection) -> dict[str, Any] | None:
    row = conn.execute(
        f"SELECT {', '.join(COLUMNS)} FROM sync_log ORDER BY started_at DESC, id DESC LIMIT 1"
    ).fetchone()
    return dict(zip(COLUMNS, row)) if row else None
