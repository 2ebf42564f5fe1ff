"""
Stage 3: Report generation.

Produces two outputs:
  1. spl_report.json: metadata, stats, and a downsampled chart series
  2. spl_summary.txt: printable summary in the order of the dashboard tiles

Chart data is always stride-sampled from the full series; the stats in the
same report are computed from every sample.
"""

import math
from typing import List, Optional

from .constants import CHART_DOMAIN_PADDING_DB, CHART_MAX_POINTS, UNKNOWN_DATE
from .downsample import downsample
from .models import EventInsight, LoadedLog, ParsedLog, SampleRecord


# ---------------------------------------------------------------------------
# Chart data
# ---------------------------------------------------------------------------

def chart_payload(parsed: ParsedLog, max_points: int = CHART_MAX_POINTS) -> dict:
    """Downsampled points plus a padded y-axis domain."""
    points = downsample(parsed.series, max_points)
    stats = parsed.stats
    return {
        "points": [r.to_dict() for r in points],
        "point_count": len(points),
        "total_samples": len(parsed.series),
        "y_domain": [
            math.floor(stats.min_level - CHART_DOMAIN_PADDING_DB),
            math.ceil(stats.max_level + CHART_DOMAIN_PADDING_DB),
        ],
    }


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def generate_json_report(
    loaded: LoadedLog,
    insight: Optional[EventInsight] = None,
    max_points: int = CHART_MAX_POINTS,
    source_metadata: Optional[dict] = None,
) -> dict:
    """Generate the full structured JSON report."""
    return {
        "file_name": loaded.file_name,
        "metadata": loaded.metadata.to_dict(),
        "source": source_metadata or {},
        "stats": loaded.stats.to_dict(),
        "insight": insight.to_dict() if insight else None,
        "chart": chart_payload(loaded.parsed, max_points),
    }


# ---------------------------------------------------------------------------
# Text summary
# ---------------------------------------------------------------------------

def _moment(record: Optional[SampleRecord]) -> str:
    if record is None:
        return "No data before 10:00"
    return f"{record.level} dB at {record.timestamp_label}"


def generate_text_report(loaded: LoadedLog, insight: Optional[EventInsight] = None) -> str:
    """Human-readable summary of one analyzed log."""
    stats = loaded.stats
    name = insight.event_name if insight else loaded.metadata.derived_name
    date = insight.event_date if insight else loaded.metadata.derived_date

    lines: List[str] = []
    lines.append("=" * 60)
    lines.append(f"SPL REPORT: {name}")
    lines.append("=" * 60)
    lines.append(f"Date:      {date if date else UNKNOWN_DATE}")
    lines.append(f"File:      {loaded.file_name}")
    lines.append(f"Duration:  {stats.duration_label}")
    lines.append(f"Samples:   {stats.sample_count}")
    lines.append("")
    lines.append(f"Average Level:  {stats.average_level:.1f} dB")
    lines.append(f"Range:          {stats.min_level} - {stats.max_level} dB")
    lines.append(f"Safety Status:  {stats.safety_tier.value}")
    if stats.top3_distinct:
        lines.append(f"Loudest Moment: {_moment(stats.top3_distinct[0])}")
    lines.append(f"Peak < 10:00:   {_moment(stats.peak_before_10)}")

    lines.append("")
    lines.append("Top 3 Loudest Moments")
    lines.append("-" * 60)
    for i, record in enumerate(stats.top3_distinct, 1):
        lines.append(f"  #{i}  {record.timestamp_label}  {record.level} dB")

    if insight is not None:
        lines.append("")
        lines.append("Insight")
        lines.append("-" * 60)
        lines.append(f"  {insight.summary}")
        lines.append(f"  Compliance: {insight.compliance_note}")

    return "\n".join(lines) + "\n"
