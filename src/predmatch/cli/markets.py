"""Markets subcommand: load, list."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from predmatch.config.settings import Settings
from predmatch.ingestion import VENUE_INFO, demo_markets, load_snapshot
from predmatch.models import Market
from predmatch.storage.db import get_connection, init_schema
from predmatch.storage.markets import list_markets as storage_list_markets
from predmatch.storage.markets import upsert_markets, upsert_venues

app = typer.Typer(help="Market snapshot loading and listing")


def resolve_markets(settings: Settings, snapshot: Path | None, demo: bool) -> list[Market]:
    """Markets from --demo, --snapshot, or the [sync] config section, in that order."""
    if demo or (snapshot is None and settings.demo_mode):
        return demo_markets()
    path = snapshot or settings.snapshot_path
    if not path:
        typer.echo("No market source. Pass --snapshot PATH or --demo.")
        raise typer.Exit(1)
    try:
        return load_snapshot(path)
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Cannot read snapshot {path}: {e}")
        raise typer.Exit(1)


@app.command("load")
def load(
    ctx: typer.Context,
    snapshot: Path | None = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of venue markets"),
    demo: bool = typer.Option(False, "--demo", help="Use the built-in demo market set"),
) -> None:
    """Store markets from a snapshot without matching."""
    settings = ctx.obj["settings"]
    markets = resolve_markets(settings, snapshot, demo)
    conn = get_connection(settings.db_path)
    init_schema(conn)
    try:
        upsert_venues(conn, VENUE_INFO)
        upsert_markets(conn, markets)
        typer.echo(f"Stored {len(markets)} markets.")
    finally:
        conn.close()


@app.command("list")
def list_markets(
    ctx: typer.Context,
    ungrouped: bool = typer.Option(False, "--ungrouped", help="Show only markets not yet in a group"),
) -> None:
    """List markets in the local store."""
    settings = ctx.obj["settings"]
    conn = get_connection(settings.db_path)
    init_schema(conn)
    try:
        rows = storage_list_markets(conn, ungrouped_only=ungrouped)
        for m in rows:
            group = (m.group_id or "-")[:12]
            typer.echo(f"  {m.uid[:28]:<28}  {group:<12}  {(m.liquidity or 0):>12.0f}  {m.title[:60]}")
        typer.echo(f"Total: {len(rows)} markets")
    finally:
        conn.close()
