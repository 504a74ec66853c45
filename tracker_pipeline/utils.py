"""Cross-cutting helpers: constants, environment, timestamps, output paths."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REPOSITORY_HOST = "repository.library.brown.edu"
UNKNOWN_KEY = "unknown_key"
OCR_COMPLETE_SUFFIX = "ocr_complete.json"
INGEST_COMPLETE_SUFFIX = "ingest_complete.json"
ERROR_MARKER = "error"

OUTPUT_FILE_PREFIX = "tracker_output_"
REPORT_FILE_PREFIX = "tracker_report_"
# Length of "YYYY-MM-DDTHH:MM:SS"
TIMESTAMP_WIDTH = 19

LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "warn"

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
}


# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------


def resolve_log_level_name(value: str | None = None) -> str:
    """Normalize a ``LOG_LEVEL`` value to ``debug``, ``info`` or ``warn``.

    Reads the environment when *value* is None. Anything unrecognised,
    including an unset variable, means ``warn``.
    """
    if value is None:
        value = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    name = value.strip().lower()
    return name if name in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def log_level_from_name(name: str) -> int:
    return _LOG_LEVELS.get(name, logging.WARNING)


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------


def now_stamp() -> str:
    """Current local time as a timezone-aware ISO-8601 string."""
    return datetime.now().astimezone().isoformat()


def filesystem_safe_stamp(datetime_stamp: str) -> str:
    """Turn ``2024-05-01T13:45:10.123-04:00`` into ``2024-05-01T13-45-10``."""
    return datetime_stamp.replace(":", "-")[:TIMESTAMP_WIDTH]


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def ensure_output_dir(output_dir: Path) -> Path:
    """Create *output_dir* if needed and return it."""
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
