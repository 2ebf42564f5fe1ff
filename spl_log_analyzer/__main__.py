"""
CLI entry point for the SPL log analyzer.

Usage:
    python -m spl_log_analyzer analyze <logfile> [options]
    python -m spl_log_analyzer batch <directory> [options]
"""

import argparse
import glob
import os
import sys

from .constants import BATCH_EXTENSIONS, CHART_MAX_POINTS
from .exceptions import SplAnalyzerError
from .pipeline import run_pipeline


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-dir", "-o",
        default="./spl_reports",
        help="Output directory (default: ./spl_reports)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML file overriding analysis thresholds",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=None,
        help=f"Maximum chart points in the JSON report (default: {CHART_MAX_POINTS}, or from --config)",
    )
    parser.add_argument(
        "--caption",
        action="store_true",
        help="Generate an event caption with an LLM (needs an API key)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed progress",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spl_log_analyzer",
        description="Summarize sound pressure level logs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a single SPL log file",
    )
    analyze_parser.add_argument("input", help="Path to a text or CSV SPL log")
    _add_common_options(analyze_parser)

    batch_parser = subparsers.add_parser(
        "batch",
        help="Analyze every log in a directory, one report each",
    )
    batch_parser.add_argument("directory", help="Directory containing .txt/.csv/.log files")
    _add_common_options(batch_parser)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    options = dict(
        config_path=args.config,
        max_points=args.max_points,
        caption=args.caption,
        verbose=args.verbose,
    )

    if args.command == "analyze":
        if not os.path.exists(args.input):
            print(f"Error: File not found: {args.input}", file=sys.stderr)
            return 1
        try:
            loaded = run_pipeline(args.input, output_dir=args.output_dir, **options)
        except SplAnalyzerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        stats = loaded.stats
        print(f"{loaded.metadata.derived_name} ({loaded.metadata.derived_date}): "
              f"avg {stats.average_level:.1f} dB, max {stats.max_level} dB, "
              f"{stats.duration_label}, {stats.safety_tier.value}")
        print(f"Reports in {args.output_dir}/")
        return 0

    if not os.path.isdir(args.directory):
        print(f"Error: Directory not found: {args.directory}", file=sys.stderr)
        return 1

    files = sorted(
        path
        for ext in BATCH_EXTENSIONS
        for path in glob.glob(os.path.join(args.directory, f"*{ext}"))
    )
    if not files:
        print(f"No {', '.join(BATCH_EXTENSIONS)} files found in {args.directory}")
        return 1

    print(f"Found {len(files)} files to process")
    failures = 0
    for i, filepath in enumerate(files, 1):
        basename = os.path.splitext(os.path.basename(filepath))[0]
        file_output_dir = os.path.join(args.output_dir, basename)
        print(f"\n[{i}/{len(files)}] Processing {os.path.basename(filepath)}...")
        try:
            loaded = run_pipeline(filepath, output_dir=file_output_dir, **options)
        except SplAnalyzerError as e:
            print(f"  ERROR: {e}")
            failures += 1
            continue
        print(f"  avg {loaded.stats.average_level:.1f} dB, {loaded.stats.safety_tier.value}")

    print(f"\nBatch complete. Results in {args.output_dir}/")
    return 1 if failures == len(files) else 0


if __name__ == "__main__":
    sys.exit(main())
