"""DuckDB connection and schema init."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import duckdb

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

SCHEMA_SQL = """
-- Sequences for auto-increment IDs
CREATE SEQUENCE IF NOT EXISTS opp_seq START 1;
CREATE SEQUENCE IF NOT EXISTS sync_seq START 1;

-- Trading venues
CREATE TABLE IF NOT EXISTS venues (
    venue_id        VARCHAR PRIMARY KEY,
    name            VARCHAR NOT NULL,
    url             VARCHAR
);

-- Market cache, uid = venue:market_id
CREATE TABLE IF NOT EXISTS markets (
    uid             VARCHAR PRIMARY KEY,
    market_id       VARCHAR NOT NULL,
    venue           VARCHAR NOT NULL,
    title           VARCHAR NOT NULL,
    description     VARCHAR,
    category        VARCHAR,
    status          VARCHAR NOT NULL DEFAULT 'active',
    url             VARCHAR,
    volume          DOUBLE,
    liquidity       DOUBLE,
    end_date        BIGINT,
    last_updated    BIGINT,
    group_id        VARCHAR
);

-- Outcome prices per market
CREATE TABLE IF NOT EXISTS outcomes (
    market_uid      VARCHAR NOT NULL,
    name            VARCHAR NOT NULL,
    position        INTEGER NOT NULL,
    outcome_id      VARCHAR,
    price           DOUBLE NOT NULL,
    volume          DOUBLE,
    last_updated    BIGINT NOT NULL,
    PRIMARY KEY (market_uid, name)
);

-- Matched market groups
CREATE TABLE IF NOT EXISTS market_groups (
    group_id        VARCHAR PRIMARY KEY,
    canonical_title VARCHAR NOT NULL,
    category        VARCHAR,
    is_verified     BOOLEAN DEFAULT FALSE,
    created_at      BIGINT NOT NULL
);

-- Detected opportunities, superseded rows are deactivated, not deleted
CREATE TABLE IF NOT EXISTS opportunities (
    id              BIGINT PRIMARY KEY DEFAULT nextval('opp_seq'),
    group_id        VARCHAR NOT NULL,
    type            VARCHAR NOT NULL,
    score           DOUBLE NOT NULL,
    spread          DOUBLE NOT NULL,
    description     VARCHAR NOT NULL,
    details         JSON NOT NULL,
    avg_liquidity   DOUBLE,
    is_active       BOOLEAN NOT NULL DEFAULT TRUE,
    created_at      BIGINT NOT NULL
);

-- One row per sync run
CREATE TABLE IF NOT EXISTS sync_log (
    id                  BIGINT PRIMARY KEY DEFAULT nextval('sync_seq'),
    started_at          BIGINT NOT NULL,
    ended_at            BIGINT,
    status              VARCHAR NOT NULL DEFAULT 'running',
    markets_processed   INTEGER NOT NULL DEFAULT 0,
    groups_created      INTEGER NOT NULL DEFAULT 0,
    opportunities_found INTEGER NOT NULL DEFAULT 0,
    error               VARCHAR
);
"""


def get_connection(db_path: str | Path, read_only: bool = False) -> DuckDBPyConnection:
    """Return a DuckDB connection. Caller must close or use as context manager.
    ':memory:' gives a throwaway in-process database."""
    if str(db_path) == ":memory:":
        return duckdb.connect(":memory:")
    path = Path(db_path)
    if not read_only:
        path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path), read_only=read_only)


def init_schema(conn: DuckDBPyConnection) -> None:
    """Create tables and sequences if they do not exist."""
    for stmt in SCHEMA_SQL.split(";"):
        stmt = stmt.strip()
        if stmt:
            try:
                conn.execute(stmt)
            except duckdb.Error as e:
                if "already exists" not in str(e).lower():
                    raise
