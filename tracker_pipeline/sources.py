"""Tracker file discovery, classification and correlation keys."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .models import ClassifiedPaths, FileCategory
from .utils import (
    ERROR_MARKER,
    INGEST_COMPLETE_SUFFIX,
    OCR_COMPLETE_SUFFIX,
    UNKNOWN_KEY,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_filename(file_name: str) -> FileCategory:
    """Map a bare filename to its category; first match wins."""
    if file_name.endswith(OCR_COMPLETE_SUFFIX):
        return FileCategory.OCR_COMPLETE
    if file_name.endswith(INGEST_COMPLETE_SUFFIX):
        return FileCategory.INGEST_COMPLETE
    if ERROR_MARKER in file_name:
        return FileCategory.ERROR_NAMED
    return FileCategory.OTHER


def _log_walk_error(exc: OSError) -> None:
    log.debug("Skipping unreadable entry %s: %s", exc.filename, exc)


def find_tracker_files(root: Path) -> ClassifiedPaths:
    """Walk *root* recursively and split every regular file into categories.

    Unreadable subdirectories are skipped. Raises ``OSError`` only when
    *root* itself cannot be listed. No files are opened.
    """
    root = Path(os.path.abspath(root))
    # Fail fast when the root is missing or unreadable; os.walk would
    # otherwise report it through onerror and yield nothing.
    os.listdir(root)

    classified = ClassifiedPaths()
    buckets = {
        FileCategory.OCR_COMPLETE: classified.ocr_complete,
        FileCategory.INGEST_COMPLETE: classified.ingest_complete,
        FileCategory.ERROR_NAMED: classified.error_named,
        FileCategory.OTHER: classified.other,
    }

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        for file_name in filenames:
            path = Path(dirpath) / file_name
            try:
                if not path.is_file():
                    continue
            except OSError as exc:
                _log_walk_error(exc)
                continue
            buckets[classify_filename(file_name)].append(path)

    classified.ocr_complete.sort()
    classified.ingest_complete.sort()

    log.info("len-ocr_complete_paths: %s", len(classified.ocr_complete))
    log.info("len-ingest_complete_paths: %s", len(classified.ingest_complete))
    log.info("len-error_paths: %s", len(classified.error_named))
    log.info("len-other_paths: %s", len(classified.other))
    return classified


# ---------------------------------------------------------------------------
# Correlation keys
# ---------------------------------------------------------------------------


def parse_key_from_path(path: Path | str) -> str:
    """Return the item key shared by an item's OCR and ingest trackers.

    ``/x/HH001545_0001/HH001545_0001-ingest_complete.json`` gives
    ``HH001545_0001``. Files without a usable stem give ``unknown_key``.
    """
    stem = Path(path).stem
    key = stem.split("-", 1)[0]
    if not key:
        key = UNKNOWN_KEY
    log.debug("key, ``%s``", key)
    return key
