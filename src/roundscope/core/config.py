"""
Configuration Management for RoundScope

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables

Configuration precedence (highest to lowest):
1. Environment variables (ROUNDSCOPE_*)
2. Configuration file
3. Default values

Engine functions never read this module; they take their rule constants as
explicit arguments. Only the CLI resolves a config and passes values down.
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from roundscope.core.constants import (
    BOUNDS_PADDING_FRACTION,
    COMFORTABLE_MARGIN,
    DECISIVE_MARGIN,
    DEFAULT_CANVAS_MARGIN,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_TEAM_A_LABEL,
    DEFAULT_TEAM_B_LABEL,
    HALF_LENGTH,
    MIN_BOUNDS_PADDING,
    MIN_STREAK_LENGTH,
    OVERTIME_ROUND_THRESHOLD,
    RECENT_MATCHES_LIMIT,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class RulesConfig:
    """Match format and narrative thresholds."""

    # Rounds per half before sides swap (MR12)
    half_length: int = HALF_LENGTH
    min_streak_length: int = MIN_STREAK_LENGTH
    # Total rounds above which a match counts as overtime
    overtime_round_threshold: int = OVERTIME_ROUND_THRESHOLD
    decisive_margin: int = DECISIVE_MARGIN
    comfortable_margin: int = COMFORTABLE_MARGIN


@dataclass
class SpatialConfig:
    """Kill map projection settings."""

    padding_fraction: float = BOUNDS_PADDING_FRACTION
    min_padding: float = MIN_BOUNDS_PADDING
    canvas_size: int = DEFAULT_CANVAS_SIZE
    margin: int = DEFAULT_CANVAS_MARGIN


@dataclass
class ScoreboardConfig:
    """Scoreboard team labels and default ordering."""

    team_a_label: str = DEFAULT_TEAM_A_LABEL
    team_b_label: str = DEFAULT_TEAM_B_LABEL
    default_sort_key: str = "rating"
    recent_matches_limit: int = RECENT_MATCHES_LIMIT


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class RoundScopeConfig:
    """Main configuration container."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    spatial: SpatialConfig = field(default_factory=SpatialConfig)
    scoreboard: ScoreboardConfig = field(default_factory=ScoreboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_version: str = "1.0"


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    home = Path.home()
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))
    return [
        Path.cwd() / "roundscope.yaml",
        Path.cwd() / "roundscope.toml",
        Path.cwd() / "roundscope.json",
        Path(xdg_config) / "roundscope" / "config.yaml",
        home / ".roundscope.yaml",
    ]


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with open(path) as f:
            return yaml.safe_load(f) or {}
    elif suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    elif suffix == ".json":
        with open(path) as f:
            return json.load(f)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


ENV_MAPPINGS = {
    "ROUNDSCOPE_LOG_LEVEL": ("logging", "level"),
    "ROUNDSCOPE_HALF_LENGTH": ("rules", "half_length"),
    "ROUNDSCOPE_MIN_STREAK_LENGTH": ("rules", "min_streak_length"),
    "ROUNDSCOPE_OVERTIME_THRESHOLD": ("rules", "overtime_round_threshold"),
    "ROUNDSCOPE_PADDING_FRACTION": ("spatial", "padding_fraction"),
    "ROUNDSCOPE_CANVAS_SIZE": ("spatial", "canvas_size"),
    "ROUNDSCOPE_CANVAS_MARGIN": ("spatial", "margin"),
    "ROUNDSCOPE_TEAM_A_LABEL": ("scoreboard", "team_a_label"),
    "ROUNDSCOPE_TEAM_B_LABEL": ("scoreboard", "team_b_label"),
}

# Passed through verbatim, never coerced to numbers
STRING_ENV_VARS = {"ROUNDSCOPE_LOG_LEVEL", "ROUNDSCOPE_TEAM_A_LABEL", "ROUNDSCOPE_TEAM_B_LABEL"}


def _coerce_env_value(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    for env_var, (section, key) in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is not None:
            if env_var not in STRING_ENV_VARS:
                value = _coerce_env_value(value)
            config.setdefault(section, {})[key] = value

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def dict_to_config(data: dict[str, Any]) -> RoundScopeConfig:
    """Convert a dictionary to RoundScopeConfig. Unknown keys are ignored."""
    config = RoundScopeConfig()

    for section_name in ("rules", "spatial", "scoreboard", "logging"):
        section = getattr(config, section_name)
        for key, value in (data.get(section_name) or {}).items():
            if hasattr(section, key):
                setattr(section, key, value)
            else:
                logger.debug(f"Ignoring unknown config key: {section_name}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> RoundScopeConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged RoundScopeConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: RoundScopeConfig) -> dict[str, Any]:
    """Convert RoundScopeConfig to a dictionary."""
    return asdict(config)


def save_config(config: RoundScopeConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (.yaml, .yml or .json)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown config format: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: RoundScopeConfig | None = None


def get_config() -> RoundScopeConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: RoundScopeConfig) -> None:
    """Set the global configuration."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None
