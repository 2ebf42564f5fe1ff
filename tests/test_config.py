"""Tests for YAML configuration loading."""

import pytest

from spl_log_analyzer.config import DEFAULT_CONFIG, AnalyzerConfig, config_from_mapping, load_config
from spl_log_analyzer.exceptions import ConfigError


def test_defaults_without_path():
    config = load_config(None)
    assert config == AnalyzerConfig()
    assert config.min_valid_level_db == 20
    assert config.max_valid_level_db == 160
    assert config.moderate_threshold_db == 85
    assert config.high_risk_threshold_db == 95
    assert config.peak_exclusion_seconds == 300


def test_yaml_overrides(tmp_path):
    path = tmp_path / "spl.yaml"
    path.write_text("moderate_threshold_db: 80\nhigh_risk_threshold_db: 90\ntop_peak_count: 5\n")
    config = load_config(str(path))

    assert config.moderate_threshold_db == 80.0
    assert config.high_risk_threshold_db == 90.0
    assert config.top_peak_count == 5
    assert config.min_valid_level_db == DEFAULT_CONFIG.min_valid_level_db


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("text", [
    "key: [unclosed",
    "- 1\n- 2\n",
])
def test_malformed_yaml(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(str(path))


@pytest.mark.parametrize("data", [
    {"moderate_threshold": 80},
    {"min_valid_level_db": "twenty"},
    {"min_valid_level_db": True},
    {"top_peak_count": 2.5},
    {"min_valid_level_db": 160},
    {"moderate_threshold_db": 99},
    {"chart_max_points": 0},
    {"morning_cutoff_hour": 25},
    {"top_peak_count": float("inf")},
    {"chart_max_points": float("nan")},
    {"min_valid_level_db": float("nan")},
    {"high_risk_threshold_db": float("-inf")},
])
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        config_from_mapping(data)


@pytest.mark.parametrize("text", [
    "top_peak_count: .inf\n",
    "min_valid_level_db: .nan\n",
])
def test_non_finite_yaml_values(tmp_path, text):
    path = tmp_path / "spl.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError, match="finite"):
        load_config(str(path))
