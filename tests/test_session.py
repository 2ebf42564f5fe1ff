"""Tests for the analysis session state machine."""

import pytest

from spl_log_analyzer.exceptions import InvalidTransitionError
from spl_log_analyzer.session import AnalysisSession, SessionState


def test_starts_idle():
    session = AnalysisSession()
    assert session.state is SessionState.IDLE
    assert session.result is None
    assert session.error is None


def test_success(scenario_log):
    session = AnalysisSession()
    assert session.select_file("20231025 Sunday Service.txt", scenario_log) is SessionState.COMPLETE
    assert session.result.metadata.derived_name == "Sunday Service"
    assert session.result.stats.sample_count == 3
    assert session.error is None


def test_failure_keeps_message():
    session = AnalysisSession()
    assert session.select_file("empty.txt", "nothing useful") is SessionState.ERROR
    assert "No valid SPL data" in session.error
    assert session.result is None


def test_new_selection_after_error(scenario_log):
    session = AnalysisSession()
    session.select_file("empty.txt", "")
    assert session.select_file("ok.txt", scenario_log) is SessionState.COMPLETE
    assert session.error is None


def test_reset_from_complete(scenario_log):
    session = AnalysisSession()
    session.select_file("ok.txt", scenario_log)
    session.reset()
    assert session.state is SessionState.IDLE
    assert session.result is None


def test_reset_from_analyzing():
    session = AnalysisSession()
    session.begin()
    session.reset()
    assert session.state is SessionState.IDLE


def test_fail_requires_analyzing():
    session = AnalysisSession()
    with pytest.raises(InvalidTransitionError):
        session.fail("boom")


def test_cannot_select_while_analyzing():
    session = AnalysisSession()
    session.begin()
    with pytest.raises(InvalidTransitionError):
        session.begin()
