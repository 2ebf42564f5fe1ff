"""
Data models for the SPL log analyzer.

All stages communicate via these dataclasses. They are frozen: a StatsBundle
is computed once per parsed log and recomputing means re-parsing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Parsed samples
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SampleRecord:
    """One accepted (timestamp, level) pair from a log line."""
    timestamp_label: str            # "HH:MM:SS", fractional seconds dropped
    seconds: float                  # seconds since midnight (fraction kept)
    level: float                    # dB
    line_number: int = 0            # 1-indexed source line, 0 if unknown

    @property
    def hour(self) -> int:
        return int(self.timestamp_label.split(":")[0])

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp_label,
            "seconds": self.seconds,
            "level": self.level,
        }


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class SafetyTier(str, Enum):
    """Coarse exposure classification from the average level."""
    SAFE = "Safe"
    MODERATE = "Moderate"
    HIGH_RISK = "High Risk"


@dataclass(frozen=True)
class StatsBundle:
    """Read-only summary statistics over one parsed log."""
    average_level: float
    max_level: float
    min_level: float
    peak_before_10: Optional[SampleRecord]
    top3_distinct: Tuple[SampleRecord, ...]     # level descending
    sample_count: int
    duration_seconds: float
    duration_label: str                         # "{H}h {M}m"
    safety_tier: SafetyTier

    def to_dict(self) -> dict:
        return {
            "average_level": self.average_level,
            "max_level": self.max_level,
            "min_level": self.min_level,
            "peak_before_10": self.peak_before_10.to_dict() if self.peak_before_10 else None,
            "top3_distinct": [r.to_dict() for r in self.top3_distinct],
            "sample_count": self.sample_count,
            "duration_seconds": self.duration_seconds,
            "duration": self.duration_label,
            "safety_tier": self.safety_tier.value,
        }


@dataclass(frozen=True)
class ParsedLog:
    """Chronological series plus the stats computed from it."""
    series: Tuple[SampleRecord, ...]   # ascending by seconds
    stats: StatsBundle


# ---------------------------------------------------------------------------
# File name metadata and captions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FileMetadata:
    """Event label and date derived from a file name alone."""
    derived_name: str
    derived_date: str               # "YYYY-MM-DD" or UNKNOWN_DATE

    def to_dict(self) -> dict:
        return {
            "event_name": self.derived_name,
            "event_date": self.derived_date,
        }


@dataclass(frozen=True)
class EventInsight:
    """Caption for a log: either produced by an LLM or a static fallback."""
    event_name: str
    event_date: str
    summary: str
    compliance_note: str
    source: str = "llm"             # "llm" or "fallback"

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"

    def to_dict(self) -> dict:
        return {
            "eventName": self.event_name,
            "eventDate": self.event_date,
            "summary": self.summary,
            "complianceNote": self.compliance_note,
            "source": self.source,
        }


@dataclass(frozen=True)
class LoadedLog:
    """Everything known about one analyzed file."""
    file_name: str
    metadata: FileMetadata
    parsed: ParsedLog

    @property
    def stats(self) -> StatsBundle:
        return self.parsed.stats
