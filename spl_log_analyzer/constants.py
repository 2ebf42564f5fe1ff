"""
Configuration constants for the SPL log analyzer.

Design principles:
- The level acceptance window and the safety thresholds are heuristics with no
  cited standard behind them. They are kept as literal defaults here and can
  be overridden per run through a YAML file (see config.py).
- Nothing in this module is meter-specific. Column order and delimiters are
  sniffed per line by the parser.
"""

import re

# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------

# HH:MM:SS with optional fractional seconds. Not anchored, a fragment only has
# to contain a clock time.
TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})(?:\.\d+)?")

# Delimiters between fields: whitespace, comma, semicolon, tab
FIELD_SPLIT_PATTERN = re.compile(r"[\s,;\t]+")

# Quote characters stripped from quoted CSV cells
QUOTE_CHARS = "\"'"

# Leading numeric prefix of a fragment ("85.5dB" -> 85.5)
LEADING_NUMBER_PATTERN = re.compile(
    r"^[-+]?"
    r"(?:\d+\.?\d*|\.\d+)"
    r"(?:[eE][-+]?\d+)?"
)

# Values outside this open interval are index counters, years, etc.
MIN_VALID_LEVEL_DB = 20.0
MAX_VALID_LEVEL_DB = 160.0

# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

PEAK_EXCLUSION_SECONDS = 300        # 5 min between reported peaks
TOP_PEAK_COUNT = 3
MORNING_CUTOFF_HOUR = 10            # "before 10:00" means hour 0-9

SECONDS_PER_DAY = 86_400

# Safety tier thresholds on the average level (strictly greater than)
MODERATE_THRESHOLD_DB = 85.0
HIGH_RISK_THRESHOLD_DB = 95.0

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

DEFAULT_MAX_POINTS = 2000
CHART_MAX_POINTS = 1500
CHART_DOMAIN_PADDING_DB = 5.0

# ---------------------------------------------------------------------------
# Filename metadata
# ---------------------------------------------------------------------------

UNKNOWN_DATE = "Unknown Date"

# YYYYMMDD, 19xx/20xx years with a plausible month and day
FILENAME_DATE_PATTERN = re.compile(
    r"(20\d{2}|19\d{2})(0[1-9]|1[0-2])(0[1-9]|[12]\d|3[01])"
)
FILENAME_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")

# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

REPORT_JSON_NAME = "spl_report.json"
REPORT_TEXT_NAME = "spl_summary.txt"
BATCH_EXTENSIONS = (".txt", ".csv", ".log")
