"""Config loading, profile overlay and engine thresholds."""

import pytest
from pydantic import ValidationError

from predmatch.config import DEFAULT_ENGINE_CONFIG, EngineConfig, get_settings, load_config

DEFAULT_TOML = """
[storage]
db_path = "data/test.duckdb"

[logging]
level = "info"

[matching]
match_score_floor = 60
merge_mode = "rescore"

[detection]
sanity_tolerance = 0.05
"""

DEV_TOML = """
[logging]
level = "debug"
format = "json"

[matching]
merge_mode = "PREFIX"
"""


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "default.toml").write_text(DEFAULT_TOML)
    (tmp_path / "dev.toml").write_text(DEV_TOML)
    return tmp_path


def test_default_only(config_dir):
    settings = get_settings(config_dir=config_dir)
    assert settings.db_path == "data/test.duckdb"
    assert settings.logging_level == "INFO"
    assert settings.logging_format == "console"
    assert settings.merge_mode == "rescore"
    assert settings.demo_mode is False
    assert settings.snapshot_path is None


def test_profile_overlay_deep_merges(config_dir):
    raw = load_config("dev", config_dir)
    assert raw["matching"] == {"match_score_floor": 60, "merge_mode": "PREFIX"}
    settings = get_settings("dev", config_dir)
    assert settings.logging_level == "DEBUG"
    assert settings.logging_format == "json"
    assert settings.merge_mode == "prefix"


def test_missing_profile_or_dir(config_dir, tmp_path):
    assert load_config("prod", config_dir) == load_config(None, config_dir)
    assert load_config(None, tmp_path / "nowhere") == {}


def test_engine_config_from_settings(config_dir):
    config = get_settings(config_dir=config_dir).engine_config()
    assert config.match_score_floor == 60
    assert config.sanity_tolerance == 0.05
    assert config.group_score_floor == DEFAULT_ENGINE_CONFIG.group_score_floor
    assert config.freshness_half_life_minutes == 60.0


def test_engine_config_bounds():
    with pytest.raises(ValidationError):
        EngineConfig(title_similarity_floor=1.5)
    with pytest.raises(ValidationError):
        EngineConfig(near_arbitrage_floor=0.1)
    with pytest.raises(ValidationError):
        EngineConfig(freshness_half_life_minutes=0)
