"""Opportunity persistence - deactivate-then-recreate per detection pass."""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

from predmatch.models import DetectedOpportunity

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

COLUMNS = ["id", "group_id", "type", "score", "spread", "description", "details", "avg_liquidity", "created_at"]


def deactivate_all(conn: DuckDBPyConnection) -> None:
    conn.execute("UPDATE opportunities SET is_active = false WHERE is_active = true")


def insert_opportunities(conn: DuckDBPyConnection, opportunities: list[DetectedOpportunity]) -> int:
    now_ms = int(time.time() * 1000)
    for opp in opportunities:
        conn.execute(
            """
            INSERT INTO opportunities (group_id, type, score, spread, description, details, avg_liquidity, is_active, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, true, ?)
            """,
            [
                opp.group_id,
                opp.type,
                opp.score,
                opp.spread,
                opp.description,
                json.dumps(opp.details.model_dump(mode="json")),
                opp.avg_liquidity,
                now_ms,
            ],
        )
    return len(opportunities)


def list_active(
    conn: DuckDBPyConnection,
    type: str | None = None,
    min_score: float = 0.0,
    min_spread: float = 0.0,
    venue: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """Active opportunities by score desc, as dicts with parsed details."""
    sql = f"SELECT {', '.join(COLUMNS)} FROM opportunities WHERE is_active = true AND score >= ? AND spread >= ?"
    params: list[Any] = [min_score, min_spread]
    if type:
        sql += " AND type = ?"
        params.append(type)
    if venue:
        sql += " AND group_id IN (SELECT group_id FROM markets WHERE venue = ? AND group_id IS NOT NULL)"
        params.append(venue)
    sql += " ORDER BY score DESC, id LIMIT ? OFFSET ?"
    params.extend([limit, offset])
    rows = conn.execute(sql, params).fetchall()
    out = []
    for row in rows:
        r = dict(zip(COLUMNS, row))
        r["details"] = json.loads(r["details"]) if isinstance(r["details"], str) else r["details"]
        out.append(r)
    return out


def count_active(conn: DuckDBPyConnection) -> int:
    return conn.execute("SELECT COUNT(*) FROM opportunities WHERE is_active = true").fetchone()[0]
