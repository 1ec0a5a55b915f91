"""Opportunity ranking and freshness decay."""

from __future__ import annotations

from datetime import datetime, timezone

from predmatch.models import DetectedOpportunity

DEFAULT_HALF_LIFE_MINUTES = 60.0


def rank_opportunities(opportunities: list[DetectedOpportunity]) -> list[DetectedOpportunity]:
    """Sort by score descending. Stable: equal scores keep input order."""
    return sorted(opportunities, key=lambda o: o.score, reverse=True)


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def apply_freshness_decay(
    score: float,
    last_updated: datetime,
    now: datetime | None = None,
    half_life_minutes: float = DEFAULT_HALF_LIFE_MINUTES,
) -> float:
    """score * 0.5 ** (age_minutes / half_life). 1.0 at age 0, 0.5 at one half-life.

    Naive datetimes are taken as UTC. A last_updated in the future counts as age 0.
    """
    now = _aware(now or datetime.now(timezone.utc))
    age_minutes = max((now - _aware(last_updated)).total_seconds() / 60.0, 0.0)
    return score * 0.5 ** (age_minutes / half_life_minutes)
