"""
Event name and date from a log's file name.

Loggers rarely record what the session was, but people name files like
"20231025 Sunday Service.txt". A YYYYMMDD run anywhere in the name becomes the
date and the rest becomes the event label.
"""

from .constants import FILENAME_DATE_PATTERN, FILENAME_EXTENSION_PATTERN, UNKNOWN_DATE
from .models import FileMetadata


def strip_extension(file_name: str) -> str:
    return FILENAME_EXTENSION_PATTERN.sub("", file_name)


def extract_file_metadata(file_name: str) -> FileMetadata:
    """
    Derive an event label and date from ``file_name``.

    Examples:
        >>> extract_file_metadata("20231025 Sunday Service.txt")
        FileMetadata(derived_name='Sunday Service', derived_date='2023-10-25')
        >>> extract_file_metadata("concert_log.txt")
        FileMetadata(derived_name='concert_log', derived_date='Unknown Date')
    """
    base = strip_extension(file_name)
    match = FILENAME_DATE_PATTERN.search(base)
    if not match:
        return FileMetadata(derived_name=base, derived_date=UNKNOWN_DATE)

    year, month, day = match.groups()
    name = (base[:match.start()] + base[match.end():]).strip()
    # Separators that joined the date to the name are left dangling
    name = name.strip("-_").strip()

    return FileMetadata(derived_name=name or base, derived_date=f"{year}-{month}-{day}")
