"""Tests for stride downsampling and chart payloads."""

import pytest

from spl_log_analyzer.analyzer import analyze_content
from spl_log_analyzer.downsample import downsample
from spl_log_analyzer.report_generator import chart_payload


@pytest.mark.parametrize("length,target", [
    (0, 10), (1, 1), (10, 10), (11, 10), (1000, 7), (2001, 2000), (12345, 1500),
])
def test_never_grows_and_keeps_first(length, target):
    data = list(range(length))
    out = downsample(data, target)
    assert len(out) <= max(length, 0)
    assert len(out) <= target
    if data:
        assert out[0] == data[0]


def test_noop_when_short_enough():
    data = [3, 1, 2]
    out = downsample(data, 3)
    assert out == data
    assert out is not data


def test_stride_selection():
    assert downsample(list(range(10)), 3) == [0, 4, 8]


def test_input_not_mutated():
    data = list(range(100))
    downsample(data, 10)
    assert data == list(range(100))


def test_target_below_one_treated_as_one():
    assert downsample([5, 6, 7], 0) == [5]


def test_chart_payload(scenario_log):
    payload = chart_payload(analyze_content(scenario_log), max_points=2)

    assert payload["total_samples"] == 3
    assert payload["point_count"] == 2
    assert [p["timestamp"] for p in payload["points"]] == ["09:59:59", "10:00:01"]
    assert payload["y_domain"] == [65, 101]
