"""
Stage 1: Tolerant line parsing for SPL logs.

Meters export wildly different layouts: REW text exports, CSVs with index
columns, semicolon-separated European files with comma decimals, lines with
unit labels. No format is declared, so each line is sniffed on its own:

  - the timestamp is the FIRST fragment holding an HH:MM:SS clock time
  - the level is the LAST fragment (scanning backwards) whose number falls in
    the plausible dB window (20, 160)

The two scans are independent passes over the same fragment list. A line that
yields no pair is skipped silently; only a file with no pairs at all is an
error, and that is raised by the analyzer, not here.
"""

import os
import re
from typing import Dict, Iterator, List, Optional, Tuple

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .constants import (
    FIELD_SPLIT_PATTERN,
    LEADING_NUMBER_PATTERN,
    QUOTE_CHARS,
    TIME_PATTERN,
)
from .models import SampleRecord

_LINE_BREAK_RE = re.compile(r"\r?\n")
_QUOTE_TABLE = str.maketrans("", "", QUOTE_CHARS)


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def tokenize_line(line: str) -> List[str]:
    """
    Split a raw line into non-empty fragments.

    Examples:
        >>> tokenize_line('  "1","12:00:01","85,5" ')
        ['1', '12:00:01', '85', '5']
        >>> tokenize_line("12:00:01;85.5;dBA")
        ['12:00:01', '85.5', 'dBA']
    """
    cleaned = line.strip().translate(_QUOTE_TABLE)
    if not cleaned:
        return []
    return [part for part in FIELD_SPLIT_PATTERN.split(cleaned) if part]


def find_time_fragment(fragments: List[str]) -> Optional[Tuple[str, re.Match]]:
    """Left-to-right scan: first fragment containing a clock time."""
    for part in fragments:
        match = TIME_PATTERN.search(part)
        if match:
            return part, match
    return None


def parse_level(fragment: str) -> Optional[float]:
    """
    Read the leading number of a fragment, accepting a comma decimal mark.

    Returns None when the fragment does not start with a number.
    """
    normalized = fragment.replace(",", ".", 1)
    match = LEADING_NUMBER_PATTERN.match(normalized)
    if not match:
        return None
    return float(match.group(0))


def find_level(
    fragments: List[str],
    time_fragment: Optional[str],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> Optional[float]:
    """Right-to-left scan: last fragment whose value is a plausible dB level."""
    for part in reversed(fragments):
        if part == time_fragment or ":" in part:
            continue
        value = parse_level(part)
        if value is None:
            continue
        if config.min_valid_level_db < value < config.max_valid_level_db:
            return value
    return None


def parse_clock(match: re.Match) -> Optional[Tuple[str, float]]:
    """
    Turn a clock-time match into (label, seconds since midnight).

    The label drops fractional seconds; the seconds value keeps them.
    Components outside a 24h clock face make the time malformed.
    """
    hours, minutes = int(match.group(1)), int(match.group(2))
    full = match.group(0)
    try:
        seconds = float(full.split(":")[2])
    except ValueError:
        return None
    if hours > 23 or minutes > 59 or seconds >= 60:
        return None
    label = full.split(".")[0]
    return label, hours * 3600 + minutes * 60 + seconds


def extract_sample(
    line: str,
    line_number: int = 0,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> Optional[SampleRecord]:
    """
    Extract one SampleRecord from a raw line, or None if the line has no
    usable (timestamp, level) pair.

    Examples:
        >>> extract_sample("12:00:01.250, 85.5").level
        85.5
        >>> extract_sample("Time, dB") is None
        True
    """
    fragments = tokenize_line(line)
    if len(fragments) < 2:
        return None

    found = find_time_fragment(fragments)
    time_fragment = found[0] if found else None
    level = find_level(fragments, time_fragment, config)

    if found is None or level is None:
        return None

    clock = parse_clock(found[1])
    if clock is None:
        return None
    label, seconds = clock

    return SampleRecord(
        timestamp_label=label,
        seconds=seconds,
        level=level,
        line_number=line_number,
    )


def split_lines(content: str) -> List[str]:
    """Split text on LF or CRLF line endings."""
    return _LINE_BREAK_RE.split(content)


def iter_samples(
    content: str,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> Iterator[SampleRecord]:
    """Yield accepted samples from a whole text buffer, in source order."""
    for line_num, line in enumerate(split_lines(content), start=1):
        record = extract_sample(line, line_num, config)
        if record is not None:
            yield record


# ---------------------------------------------------------------------------
# File source
# ---------------------------------------------------------------------------

class TextSplSource:
    """
    Reads an SPL log file from disk and streams its samples.

    Tracks line counts so callers can report how much of the file was usable.
    Invalid UTF-8 bytes are replaced rather than failing the whole file.
    """

    def __init__(self, log_path: str, *, config: AnalyzerConfig = DEFAULT_CONFIG):
        self.log_path = log_path
        self.config = config
        self._metadata: Dict = {
            "source_type": "text_log",
            "path": log_path,
            "file_name": os.path.basename(log_path),
            "total_lines": 0,
            "parsed_lines": 0,
            "skipped_lines": 0,
        }

    def read_text(self) -> str:
        with open(self.log_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()

    def records(self) -> Iterator[SampleRecord]:
        """Generator over accepted samples; updates line counters as it goes."""
        content = self.read_text()
        for line_num, line in enumerate(split_lines(content), start=1):
            self._metadata["total_lines"] += 1
            if not line.strip():
                continue
            record = extract_sample(line, line_num, self.config)
            if record is None:
                self._metadata["skipped_lines"] += 1
                continue
            self._metadata["parsed_lines"] += 1
            yield record

    def get_metadata(self) -> dict:
        return dict(self._metadata)
