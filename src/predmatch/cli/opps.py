"""Opps subcommand: detect (in-memory), list (stored)."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from predmatch.cli.markets import resolve_markets
from predmatch.opportunities import apply_freshness_decay
from predmatch.storage.db import get_connection, init_schema
from predmatch.storage.markets import from_ms
from predmatch.storage.opportunities import list_active
from predmatch.sync import detect_batch, match_batch

app = typer.Typer(help="Opportunity detection and listing")


@app.command("detect")
def detect(
    ctx: typer.Context,
    snapshot: Path | None = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of venue markets"),
    demo: bool = typer.Option(False, "--demo", help="Use the built-in demo market set"),
    as_json: bool = typer.Option(False, "--json", help="Print findings as JSON payloads"),
) -> None:
    """Match a snapshot and print ranked findings for every group."""
    settings = ctx.obj["settings"]
    config = settings.engine_config()
    markets = resolve_markets(settings, snapshot, demo)
    groups = match_batch(markets, config)
    found = detect_batch(groups, config)
    if as_json:
        typer.echo(json.dumps([{"group_id": f.group_id, **f.to_payload()} for f in found], indent=2))
        return
    titles = {g.group_id: g.canonical_title for g in groups}
    for f in found:
        typer.echo(f"  {f.score:6.1f}  {f.type:<24} {f.description}")
        typer.echo(f"          {titles.get(f.group_id, f.group_id)[:70]}")
    typer.echo(f"{len(found)} opportunities across {len(groups)} groups")


@app.command("list")
def list_opps(
    ctx: typer.Context,
    type: str | None = typer.Option(
        None, "--type", "-t", help="cross_venue_divergence, internal_sanity or arbitrage"
    ),
    min_score: float = typer.Option(0.0, "--min-score", help="Minimum stored score"),
    min_spread: float = typer.Option(0.0, "--min-spread", help="Minimum spread"),
    venue: str | None = typer.Option(None, "--venue", "-v", help="Only groups with a market on this venue"),
    limit: int = typer.Option(50, "--limit", "-n"),
    offset: int = typer.Option(0, "--offset"),
) -> None:
    """List active stored opportunities with freshness-decayed scores."""
    settings = ctx.obj["settings"]
    half_life = settings.engine_config().freshness_half_life_minutes
    conn = get_connection(settings.db_path)
    init_schema(conn)
    try:
        rows = list_active(
            conn,
            type=type,
            min_score=min_score,
            min_spread=min_spread,
            venue=venue,
            limit=limit,
            offset=offset,
        )
        for r in rows:
            decayed = apply_freshness_decay(r["score"], from_ms(r["created_at"]), half_life_minutes=half_life)
            typer.echo(f"  {r['score']:6.1f} ({decayed:6.1f})  {r['type']:<24} {r['description']}")
        typer.echo(f"Total: {len(rows)} opportunities")
    finally:
        conn.close()
