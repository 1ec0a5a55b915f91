"""Market ingestion from JSON snapshots and the built-in demo set."""

from predmatch.ingestion.demo import demo_markets
from predmatch.ingestion.snapshot import VENUE_INFO, load_snapshot, parse_market, parse_records

__all__ = ["VENUE_INFO", "demo_markets", "load_snapshot", "parse_market", "parse_records"]
