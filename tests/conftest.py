"""Pytest configuration and shared fixtures."""

import pytest


# A REW-style export: title lines, a header row, then index/time/level rows.
REW_LOG = """SPL Meter Log
Start: 2023-10-25
Index, Time, SPL (dBA)
1, 09:58:00, 78.2
2, 09:59:00, 81.5
3, 10:00:00, 92.0
4, 10:00:30, 93.4
5, 10:10:00, 88.0
6, 10:20:00, 99.1
7, 10:20:01, 98.7
8, 10:45:00, 75.0
"""

SCENARIO_LOG = "09:59:59 84\n10:00:00 96\n10:00:01 70"


@pytest.fixture
def rew_log():
    return REW_LOG


@pytest.fixture
def scenario_log():
    return SCENARIO_LOG


@pytest.fixture
def write_log(tmp_path):
    """Factory writing ``content`` to ``tmp_path/name`` and returning the path."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
