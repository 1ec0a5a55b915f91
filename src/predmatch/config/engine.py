"""EngineConfig - tunable thresholds for matching and detection."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Thresholds used by the scorer, group assigner and detectors. Passed explicitly."""

    title_similarity_floor: float = Field(0.50, ge=0, le=1)
    match_score_floor: float = 55.0
    group_score_floor: float = 55.0
    divergence_spread_floor: float = Field(0.03, ge=0)
    sanity_tolerance: float = Field(0.03, ge=0)
    near_arbitrage_floor: float = Field(-0.02, le=0)
    freshness_half_life_minutes: float = Field(60.0, gt=0)


DEFAULT_ENGINE_CONFIG = EngineConfig()
