"""
SPL Log Analyzer

Turns loosely formatted sound pressure level logs (REW exports, meter CSVs,
free text) into a chronological series plus summary statistics: average,
extremes, the three loudest distinct moments, the loudest moment before
10:00, duration and a coarse safety tier.
"""

from .analyzer import analyze_content, analyze_records, compute_stats
from .config import AnalyzerConfig, load_config
from .downsample import downsample
from .exceptions import ConfigError, NoValidDataError, SplAnalyzerError
from .filename_meta import extract_file_metadata
from .models import (
    EventInsight,
    FileMetadata,
    LoadedLog,
    ParsedLog,
    SafetyTier,
    SampleRecord,
    StatsBundle,
)
from .parser import extract_sample

__version__ = "0.1.0"
