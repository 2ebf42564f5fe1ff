"""End-to-end tests for the pipeline and CLI."""

import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from spl_log_analyzer.__main__ import main
from spl_log_analyzer.constants import REPORT_JSON_NAME, REPORT_TEXT_NAME
from spl_log_analyzer.exceptions import NoValidDataError
from spl_log_analyzer.pipeline import run_pipeline


def test_run_pipeline_writes_reports(write_log, rew_log, tmp_path):
    path = write_log("20231025 Sunday Service.txt", rew_log)
    out = tmp_path / "out"
    loaded = run_pipeline(str(path), output_dir=str(out))

    assert loaded.metadata.derived_date == "2023-10-25"
    report = json.loads((out / REPORT_JSON_NAME).read_text())
    assert report["metadata"] == {"event_name": "Sunday Service", "event_date": "2023-10-25"}
    assert report["stats"]["sample_count"] == 8
    assert report["stats"]["safety_tier"] == "Moderate"
    assert report["stats"]["peak_before_10"]["timestamp"] == "09:59:00"
    assert report["source"]["skipped_lines"] == 3
    assert report["insight"] is None
    assert report["chart"]["total_samples"] == 8

    summary = (out / REPORT_TEXT_NAME).read_text()
    assert "SPL REPORT: Sunday Service" in summary
    assert "Safety Status:  Moderate" in summary
    assert "#1  10:20:00  99.1 dB" in summary


def test_max_points_limits_chart(write_log, rew_log, tmp_path):
    path = write_log("log.txt", rew_log)
    run_pipeline(str(path), output_dir=str(tmp_path), max_points=3)
    report = json.loads((tmp_path / REPORT_JSON_NAME).read_text())
    assert report["chart"]["point_count"] == 3
    # stats still use every sample
    assert report["stats"]["sample_count"] == 8


def test_config_file_applies(write_log, rew_log, tmp_path):
    path = write_log("log.txt", rew_log)
    cfg = write_log("spl.yaml", "moderate_threshold_db: 70\nhigh_risk_threshold_db: 80\nchart_max_points: 2\n")
    loaded = run_pipeline(str(path), output_dir=str(tmp_path / "out"), config_path=str(cfg))

    assert loaded.stats.safety_tier.value == "High Risk"
    report = json.loads((tmp_path / "out" / REPORT_JSON_NAME).read_text())
    assert report["chart"]["point_count"] == 2


def test_caption_included(write_log, rew_log, tmp_path):
    reply = json.dumps({
        "eventName": "Sunday Service",
        "eventDate": "2023-10-25",
        "summary": "Loud.",
        "complianceNote": "Check levels.",
    })
    path = write_log("20231025 Sunday Service.txt", rew_log)
    run_pipeline(str(path), output_dir=str(tmp_path / "out"), caption=True,
                 llm=FakeListChatModel(responses=[reply]))

    report = json.loads((tmp_path / "out" / REPORT_JSON_NAME).read_text())
    assert report["insight"]["source"] == "llm"
    assert "Compliance: Check levels." in (tmp_path / "out" / REPORT_TEXT_NAME).read_text()


def test_no_valid_data_propagates(write_log, tmp_path):
    path = write_log("empty.txt", "Index, Time, SPL\n")
    with pytest.raises(NoValidDataError):
        run_pipeline(str(path), output_dir=str(tmp_path / "out"))


class TestCli:

    def test_analyze(self, write_log, rew_log, tmp_path, capsys):
        path = write_log("20231025 Sunday Service.txt", rew_log)
        out = tmp_path / "reports"
        assert main(["analyze", str(path), "-o", str(out)]) == 0

        assert (out / REPORT_JSON_NAME).exists()
        assert "Sunday Service (2023-10-25)" in capsys.readouterr().out

    def test_analyze_missing_file(self, tmp_path, capsys):
        assert main(["analyze", str(tmp_path / "nope.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_analyze_no_data(self, write_log, tmp_path, capsys):
        path = write_log("bad.txt", "hello\nworld\n")
        assert main(["analyze", str(path), "-o", str(tmp_path / "out")]) == 1
        assert "No valid SPL data" in capsys.readouterr().err

    def test_analyze_non_finite_config(self, write_log, rew_log, tmp_path, capsys):
        path = write_log("a.txt", rew_log)
        cfg = tmp_path / "spl.yaml"
        cfg.write_text("chart_max_points: .nan\n")
        assert main(["analyze", str(path), "-o", str(tmp_path / "out"), "-c", str(cfg)]) == 1
        assert "must be finite" in capsys.readouterr().err

    def test_batch_continues_past_bad_files(self, write_log, rew_log, scenario_log, tmp_path, capsys):
        write_log("a.txt", rew_log)
        write_log("b.csv", scenario_log)
        write_log("c.log", "no data")
        write_log("ignored.md", rew_log)
        out = tmp_path / "reports"

        assert main(["batch", str(tmp_path), "-o", str(out)]) == 0
        printed = capsys.readouterr().out
        assert "Found 3 files" in printed
        assert "ERROR:" in printed
        assert (out / "a" / REPORT_JSON_NAME).exists()
        assert (out / "b" / REPORT_JSON_NAME).exists()
        assert not (out / "c").exists()

    def test_batch_empty_directory(self, tmp_path):
        assert main(["batch", str(tmp_path)]) == 1
