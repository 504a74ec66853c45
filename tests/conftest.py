"""Shared fixtures for the tracker pipeline test suite.

Tracker trees are built under ``tmp_path`` so every test gets its own copy.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Configure verbose logging for test debugging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
    force=True,
)
log = logging.getLogger("conftest")


def ocr_payload(**overrides: Any) -> dict[str, Any]:
    """A valid OCR tracker body; keyword arguments replace fields."""
    payload: dict[str, Any] = {
        "orientation": 0,
        "orientation_conf": 12.5,
        "script": "Latin",
        "script_conf": 3.33,
        "image_name": "HH001545_0001.jpg",
        "word_count": 250,
        "average_confidence": 91.2,
        "high_conf_ratio": 0.8,
        "mid_conf_ratio": 0.15,
        "low_conf_ratio": 0.05,
    }
    payload.update(overrides)
    return payload


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_item(
    root: Path,
    key: str,
    *,
    pid: str | None = None,
    ocr: dict[str, Any] | None = None,
) -> tuple[Path | None, Path | None]:
    """Write an item folder with optional OCR and ingest trackers.

    Returns (ocr_path, ingest_path).
    """
    item_dir = root / key.split("_")[0] / key
    ocr_path = None
    ingest_path = None
    if ocr is not None:
        ocr_path = write_json(item_dir / f"{key}-ocr_complete.json", ocr)
    if pid is not None:
        ingest_path = write_json(
            item_dir / f"{key}-ingest_complete.json",
            {"pid": pid, "status": "ingested"},
        )
    return ocr_path, ingest_path


@pytest.fixture
def tracker_tree(tmp_path: Path) -> dict[str, Any]:
    """3 matched items, 1 orphan OCR tracker, 1 malformed OCR tracker,
    plus an error log and an unrelated file.
    """
    root = tmp_path / "trackers"
    pairs = {
        "HH001545_0001": "bdr:1001",
        "HH001545_0002": "bdr:1002",
        "HH001546_0001": "bdr:1003",
    }
    for key, pid in pairs.items():
        write_item(root, key, pid=pid, ocr=ocr_payload(image_name=f"{key}.jpg"))

    orphan, _ = write_item(root, "HH009999_0001", ocr=ocr_payload())

    malformed = ocr_payload()
    del malformed["word_count"]
    bad, _ = write_item(root, "HH001547_0001", ocr=malformed)

    error_file = root / "HH001547" / "HH001547_0001" / "HH001547_0001-ocr_error.log"
    error_file.write_text("tesseract failed", encoding="utf-8")
    other_file = root / "HH001545" / "notes.txt"
    other_file.write_text("misc", encoding="utf-8")

    log.debug("tracker_tree built at %s", root)
    return {
        "root": root,
        "pairs": pairs,
        "orphan": orphan,
        "malformed": bad,
        "error_file": error_file,
        "other_file": other_file,
    }


@pytest.fixture
def tmp_output(tmp_path: Path) -> Path:
    """Return a temporary output directory for a single test."""
    return tmp_path / "output"
