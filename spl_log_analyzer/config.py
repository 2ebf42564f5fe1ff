"""
Analyzer configuration.

Defaults come from constants.py. A YAML file may override any of them:

    # spl_config.yaml
    min_valid_level_db: 30
    moderate_threshold_db: 80
    high_risk_threshold_db: 90

Unknown keys are rejected rather than ignored so a typo cannot silently fall
back to the default threshold.
"""

import math
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .constants import (
    CHART_MAX_POINTS,
    HIGH_RISK_THRESHOLD_DB,
    MAX_VALID_LEVEL_DB,
    MIN_VALID_LEVEL_DB,
    MODERATE_THRESHOLD_DB,
    MORNING_CUTOFF_HOUR,
    PEAK_EXCLUSION_SECONDS,
    TOP_PEAK_COUNT,
)
from .exceptions import ConfigError


@dataclass(frozen=True)
class AnalyzerConfig:
    """Tunable thresholds for parsing, statistics and display."""
    min_valid_level_db: float = MIN_VALID_LEVEL_DB
    max_valid_level_db: float = MAX_VALID_LEVEL_DB
    peak_exclusion_seconds: float = PEAK_EXCLUSION_SECONDS
    top_peak_count: int = TOP_PEAK_COUNT
    morning_cutoff_hour: int = MORNING_CUTOFF_HOUR
    moderate_threshold_db: float = MODERATE_THRESHOLD_DB
    high_risk_threshold_db: float = HIGH_RISK_THRESHOLD_DB
    chart_max_points: int = CHART_MAX_POINTS

    def validate(self) -> "AnalyzerConfig":
        if self.min_valid_level_db >= self.max_valid_level_db:
            raise ConfigError(
                f"min_valid_level_db ({self.min_valid_level_db}) must be below "
                f"max_valid_level_db ({self.max_valid_level_db})"
            )
        if self.moderate_threshold_db > self.high_risk_threshold_db:
            raise ConfigError(
                f"moderate_threshold_db ({self.moderate_threshold_db}) must not "
                f"exceed high_risk_threshold_db ({self.high_risk_threshold_db})"
            )
        if self.top_peak_count < 0 or self.peak_exclusion_seconds < 0:
            raise ConfigError("top_peak_count and peak_exclusion_seconds must be >= 0")
        if not 0 <= self.morning_cutoff_hour <= 24:
            raise ConfigError("morning_cutoff_hour must be between 0 and 24")
        if self.chart_max_points < 1:
            raise ConfigError("chart_max_points must be >= 1")
        return self


DEFAULT_CONFIG = AnalyzerConfig()

_INT_FIELDS = {"top_peak_count", "morning_cutoff_hour", "chart_max_points"}


def config_from_mapping(data: dict, base: AnalyzerConfig = DEFAULT_CONFIG) -> AnalyzerConfig:
    """Apply a mapping of overrides on top of ``base``."""
    known = {f.name for f in fields(AnalyzerConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    overrides = {}
    for key, value in data.items():
        # bool is an int subclass, but "true" is never a threshold
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ConfigError(f"{key} must be finite, got {value!r}")
        if key in _INT_FIELDS:
            if value != int(value):
                raise ConfigError(f"{key} must be an integer, got {value!r}")
            value = int(value)
        else:
            value = float(value)
        overrides[key] = value

    return replace(base, **overrides).validate()


def load_config(yaml_path: Optional[str] = None) -> AnalyzerConfig:
    """
    Load analyzer configuration from YAML.

    Returns the defaults when no path is given. An explicit path that does not
    exist, does not parse, or holds something other than a mapping raises
    ConfigError.
    """
    if yaml_path is None:
        return DEFAULT_CONFIG

    if not os.path.exists(yaml_path):
        raise ConfigError(f"Config file not found: {yaml_path}")

    import yaml
    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {yaml_path}: {e}") from e

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"{yaml_path} must contain a mapping of settings")
    return config_from_mapping(data)
