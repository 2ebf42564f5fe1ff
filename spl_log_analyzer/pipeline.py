"""
Pipeline orchestrator: wires the stages together for one file.

read → parse + stats → file name metadata → (optional) caption → reports
"""

import json
import os
import time
from typing import Optional

from .analyzer import analyze_records
from .caption import generate_event_insight
from .config import load_config
from .constants import REPORT_JSON_NAME, REPORT_TEXT_NAME
from .filename_meta import extract_file_metadata
from .models import LoadedLog
from .parser import TextSplSource
from .report_generator import generate_json_report, generate_text_report


def run_pipeline(
    input_path: str,
    *,
    output_dir: str = ".",
    config_path: Optional[str] = None,
    max_points: Optional[int] = None,
    caption: bool = False,
    llm=None,
    verbose: bool = False,
) -> LoadedLog:
    """
    Analyze one SPL log file and write its reports.

    Args:
        input_path: Path to the text/CSV log
        output_dir: Directory for spl_report.json and spl_summary.txt
        config_path: Optional YAML file overriding thresholds
        max_points: Chart point budget for the JSON report (default from config)
        caption: Ask an LLM for an event caption
        llm: LangChain chat model to use when captioning (default from env)
        verbose: Print progress details

    Returns:
        LoadedLog with the parsed series, stats and file name metadata

    Raises:
        NoValidDataError: the file holds no usable samples
        ConfigError: the config file is invalid
    """
    def log(msg: str):
        if verbose:
            print(msg)

    t_start = time.time()
    config = load_config(config_path)
    if max_points is None:
        max_points = config.chart_max_points
    file_name = os.path.basename(input_path)

    log(f"\n--- Parse: {file_name} ---")
    source = TextSplSource(input_path, config=config)
    parsed = analyze_records(source.records(), config)
    source_meta = source.get_metadata()
    log(f"  {source_meta['parsed_lines']} samples from {source_meta['total_lines']} lines "
        f"({source_meta['skipped_lines']} skipped)")

    stats = parsed.stats
    log(f"  Average {stats.average_level:.1f} dB, max {stats.max_level} dB, "
        f"duration {stats.duration_label}, {stats.safety_tier.value}")

    loaded = LoadedLog(
        file_name=file_name,
        metadata=extract_file_metadata(file_name),
        parsed=parsed,
    )

    insight = None
    if caption:
        log("\n--- Caption ---")
        insight = generate_event_insight(file_name, stats, llm=llm, verbose=verbose)
        log(f"  {insight.source}: {insight.summary}")

    log("\n--- Reports ---")
    os.makedirs(output_dir, exist_ok=True)

    json_report = generate_json_report(loaded, insight, max_points, source_meta)
    json_path = os.path.join(output_dir, REPORT_JSON_NAME)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(json_report, f, indent=2)
    log(f"  JSON report: {json_path}")

    text_path = os.path.join(output_dir, REPORT_TEXT_NAME)
    with open(text_path, "w", encoding="utf-8") as f:
        f.write(generate_text_report(loaded, insight))
    log(f"  Summary: {text_path}")

    log(f"\n=== Done in {time.time() - t_start:.2f}s ===")
    return loaded
