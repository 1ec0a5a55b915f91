"""Sync subcommand: run, status."""

from __future__ import annotations

from pathlib import Path

import typer

from predmatch.cli.markets import resolve_markets
from predmatch.storage.db import get_connection, init_schema
from predmatch.sync import run_sync, sync_status

app = typer.Typer(help="Refresh cycle: store, match, detect")


@app.command("run")
def run(
    ctx: typer.Context,
    snapshot: Path | None = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of venue markets"),
    demo: bool = typer.Option(False, "--demo", help="Use the built-in demo market set"),
    merge_mode: str | None = typer.Option(
        None, "--merge-mode", help="rescore, prefix or none (overrides config)"
    ),
) -> None:
    """Store markets, group new matches and redetect all opportunities."""
    settings = ctx.obj["settings"]
    markets = resolve_markets(settings, snapshot, demo)
    conn = get_connection(settings.db_path)
    init_schema(conn)
    try:
        result = run_sync(conn, markets, settings.engine_config(), merge_mode or settings.merge_mode)
    except ValueError as e:
        typer.echo(f"Sync failed: {e}")
        raise typer.Exit(1)
    finally:
        conn.close()
    typer.echo(
        f"Processed {result.markets_processed} markets, created {result.groups_created} groups "
        f"({result.groups_merged} merged), found {result.opportunities_found} opportunities."
    )


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show the last sync run and store counts."""
    settings = ctx.obj["settings"]
    conn = get_connection(settings.db_path)
    init_schema(conn)
    try:
        info = sync_status(conn)
    finally:
        conn.close()
    last = info["last_sync"]
    if last is None:
        typer.echo("No sync has run yet.")
    else:
        line = f"Last sync #{last['id']}: {last['status']}"
        if last["error"]:
            line += f" ({last['error']})"
        typer.echo(line)
    stats = info["stats"]
    typer.echo(
        f"Markets: {stats['markets']}  Groups: {stats['groups']}  "
        f"Active opportunities: {stats['active_opportunities']}"
    )
