"""Match subcommand: run the matcher over a snapshot without touching the store."""

from __future__ import annotations

from pathlib import Path

import typer

from predmatch.cli.markets import resolve_markets
from predmatch.matching import assign_groups, find_all_matches

app = typer.Typer(help="Cross-venue market matching")


@app.command("run")
def run_match(
    ctx: typer.Context,
    snapshot: Path | None = typer.Option(None, "--snapshot", "-s", help="JSON snapshot of venue markets"),
    demo: bool = typer.Option(False, "--demo", help="Use the built-in demo market set"),
    show_candidates: bool = typer.Option(False, "--candidates", help="Also print every accepted pair"),
) -> None:
    """Score all cross-venue pairs and print the resulting groups."""
    settings = ctx.obj["settings"]
    config = settings.engine_config()
    markets = resolve_markets(settings, snapshot, demo)
    candidates = find_all_matches(markets, config)
    if show_candidates:
        for c in candidates:
            typer.echo(f"  {c.score:5.1f}  {c.market_a.uid} <-> {c.market_b.uid}  ({'; '.join(c.reasons)})")
    groups = assign_groups(markets, candidates, min_score=config.group_score_floor)
    for g in groups:
        typer.echo(f"{g.canonical_title}")
        for m in g.markets:
            typer.echo(f"    {m.display_venue:<12} {m.title}")
    typer.echo(f"{len(markets)} markets, {len(candidates)} candidates, {len(groups)} groups")
