"""Configuration: TOML settings and engine thresholds."""

from predmatch.config.engine import DEFAULT_ENGINE_CONFIG, EngineConfig
from predmatch.config.settings import Settings, get_settings, load_config

__all__ = ["DEFAULT_ENGINE_CONFIG", "EngineConfig", "Settings", "get_settings", "load_config"]
