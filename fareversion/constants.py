"""
Centralized constants for fareversion.

This module defines immutable configuration values used across fareversion,
including resolution defaults, sample data parameters, data file limits,
and logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Resolution defaults
# ---------------------------------------------------------------------------

#: Whether the ``close`` boundary of a validity window is inclusive.
DEFAULT_INCLUSIVE_END: Final[bool] = True

#: Whether commands print the natural-language explanation.
DEFAULT_SHOW_EXPLANATION: Final[bool] = True

#: ``strftime`` format used when rendering instants for humans.
DEFAULT_DATE_FORMAT: Final[str] = "%Y-%m-%d"

#: Milliseconds in one day.
MS_PER_DAY: Final[int] = 24 * 60 * 60 * 1000

# ---------------------------------------------------------------------------
# Version data files
# ---------------------------------------------------------------------------

#: Keys every version record must carry (camelCase wire names).
RECORD_REQUIRED_KEYS: Final[Sequence[str]] = ("version", "publishDate", "open", "close")

#: File suffixes mapped to the data format used to read them.
DATA_FILE_FORMATS: Final[Mapping[str, str]] = {
    ".json": "json",
    ".toml": "toml",
}

#: Maximum allowed file size (in bytes) when reading data or config files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Sample data generation
# ---------------------------------------------------------------------------

#: Default first day of the generated timeline (ISO date).
SAMPLE_START_DATE: Final[str] = "2025-09-23"

#: Default last day of the generated timeline (ISO date).
SAMPLE_END_DATE: Final[str] = "2026-09-23"

#: Default number of generated versions.
SAMPLE_VERSION_COUNT: Final[int] = 4

#: Random jitter (days, either direction) applied to publish offsets.
SAMPLE_PUBLISH_JITTER_DAYS: Final[int] = 15

#: Days kept free at the end of the timeline for the last publish date.
SAMPLE_PUBLISH_TAIL_DAYS: Final[int] = 90

#: Maximum delay (days) between publishing and the window opening.
SAMPLE_MAX_OPEN_DELAY_DAYS: Final[int] = 30

#: Minimum and extra random length (days) of a validity window.
SAMPLE_MIN_WINDOW_DAYS: Final[int] = 30
SAMPLE_EXTRA_WINDOW_DAYS: Final[int] = 90

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
