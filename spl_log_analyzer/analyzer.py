"""
Stage 2: Statistics over a parsed SPL log.

parse every line → sort by time → mean / extremes → distinct peaks →
pre-10:00 peak → duration → safety tier

Peak selection is greedy over the level-descending order with a fixed
exclusion window, so consecutive seconds of one loud event cannot take all
three slots. Ties in level go to the earlier timestamp, then to the earlier
source line.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .constants import SECONDS_PER_DAY
from .exceptions import NoValidDataError
from .models import ParsedLog, SafetyTier, SampleRecord, StatsBundle
from .parser import iter_samples


# ---------------------------------------------------------------------------
# Orderings
# ---------------------------------------------------------------------------

def sort_by_time(records: Sequence[SampleRecord]) -> Tuple[SampleRecord, ...]:
    """Stable ascending sort on seconds since midnight."""
    return tuple(sorted(records, key=lambda r: r.seconds))


def sort_by_level(records: Sequence[SampleRecord]) -> List[SampleRecord]:
    """Level descending; equal levels keep the earlier timestamp first."""
    indexed = list(enumerate(records))
    indexed.sort(key=lambda item: (-item[1].level, item[1].seconds, item[0]))
    return [record for _, record in indexed]


# ---------------------------------------------------------------------------
# Individual statistics
# ---------------------------------------------------------------------------

def average_level(records: Sequence[SampleRecord]) -> float:
    # fsum is exactly rounded, so the mean does not depend on line order
    return math.fsum(r.level for r in records) / len(records)


def select_distinct_peaks(
    by_level: Iterable[SampleRecord],
    count: int = DEFAULT_CONFIG.top_peak_count,
    exclusion_seconds: float = DEFAULT_CONFIG.peak_exclusion_seconds,
) -> Tuple[SampleRecord, ...]:
    """
    Greedily pick up to ``count`` peaks from a level-descending sequence.

    A candidate is accepted only if it lies at least ``exclusion_seconds``
    away from every peak already accepted.

    Examples:
        >>> recs = [SampleRecord("12:00:00", 43200, 99), SampleRecord("12:00:01", 43201, 98),
        ...         SampleRecord("12:10:00", 43800, 90)]
        >>> [r.level for r in select_distinct_peaks(recs)]
        [99, 90]
    """
    peaks: List[SampleRecord] = []
    if count <= 0:
        return ()
    for candidate in by_level:
        if all(abs(p.seconds - candidate.seconds) >= exclusion_seconds for p in peaks):
            peaks.append(candidate)
            if len(peaks) >= count:
                break
    return tuple(peaks)


def find_peak_before(
    records: Iterable[SampleRecord],
    cutoff_hour: int = DEFAULT_CONFIG.morning_cutoff_hour,
) -> Optional[SampleRecord]:
    """Loudest record whose clock hour is strictly below ``cutoff_hour``."""
    best: Optional[SampleRecord] = None
    for record in records:
        if record.hour < cutoff_hour and (best is None or record.level > best.level):
            best = record
    return best


def duration_seconds(series: Sequence[SampleRecord]) -> float:
    """Span of a time-sorted series, allowing for a single midnight wrap."""
    span = series[-1].seconds - series[0].seconds
    if span < 0:
        span += SECONDS_PER_DAY
    return span


def format_duration(seconds: float) -> str:
    """
    Whole hours and minutes; residual seconds are dropped.

    Examples:
        >>> format_duration(1200)
        '0h 20m'
        >>> format_duration(3 * 3600 + 59 * 60 + 59)
        '3h 59m'
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{hours}h {minutes}m"


def classify_safety(avg: float, config: AnalyzerConfig = DEFAULT_CONFIG) -> SafetyTier:
    if avg > config.high_risk_threshold_db:
        return SafetyTier.HIGH_RISK
    if avg > config.moderate_threshold_db:
        return SafetyTier.MODERATE
    return SafetyTier.SAFE


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

def compute_stats(
    records: Sequence[SampleRecord],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> StatsBundle:
    """
    Compute the StatsBundle for records given in source order.

    Raises:
        NoValidDataError: if ``records`` is empty
    """
    if not records:
        raise NoValidDataError()

    series = sort_by_time(records)
    by_level = sort_by_level(records)
    avg = average_level(records)
    span = duration_seconds(series)

    return StatsBundle(
        average_level=avg,
        max_level=by_level[0].level,
        min_level=by_level[-1].level,
        peak_before_10=find_peak_before(records, config.morning_cutoff_hour),
        top3_distinct=select_distinct_peaks(
            by_level, config.top_peak_count, config.peak_exclusion_seconds),
        sample_count=len(records),
        duration_seconds=span,
        duration_label=format_duration(span),
        safety_tier=classify_safety(avg, config),
    )


def analyze_records(
    records: Iterable[SampleRecord],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> ParsedLog:
    """Build the sorted series and its stats from records in source order."""
    records = list(records)
    stats = compute_stats(records, config)
    return ParsedLog(series=sort_by_time(records), stats=stats)


def analyze_content(content: str, config: AnalyzerConfig = DEFAULT_CONFIG) -> ParsedLog:
    """
    Parse a whole SPL log text buffer and compute its statistics.

    Raises:
        NoValidDataError: if no line yields a (timestamp, level) pair
    """
    return analyze_records(iter_samples(content, config), config)
