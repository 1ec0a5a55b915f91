"""DuckDB persistence for markets, groups, opportunities and sync runs."""

from predmatch.storage.db import get_connection, init_schema

__all__ = ["get_connection", "init_schema"]
