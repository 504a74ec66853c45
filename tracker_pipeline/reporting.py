"""CSV table and run-report output."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .models import OcrRecord, RunReport, TableWriteResult
from .utils import (
    LOG_LEVEL_ENV_VAR,
    OUTPUT_FILE_PREFIX,
    REPORT_FILE_PREFIX,
    filesystem_safe_stamp,
)

log = logging.getLogger(__name__)

CSV_COLUMNS = list(OcrRecord.model_fields)


# ---------------------------------------------------------------------------
# CSV table
# ---------------------------------------------------------------------------


def make_output_filename(
    datetime_stamp: str,
    prefix: str = OUTPUT_FILE_PREFIX,
    suffix: str = ".csv",
) -> str:
    """Build e.g. ``tracker_output_2024-05-01T13-45-10.csv``."""
    return f"{prefix}{filesystem_safe_stamp(datetime_stamp)}{suffix}"


def write_tracker_csv(
    records: list[OcrRecord],
    output_dir: Path,
    datetime_stamp: str,
) -> TableWriteResult:
    """Write one row per record (header first) and return the outcome.

    Never raises. On failure the partially written file is removed and the
    error text is returned instead of a path.
    """
    csv_path = output_dir / make_output_filename(datetime_stamp)
    try:
        with open(csv_path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for record in records:
                writer.writerow(record.model_dump())
    except (OSError, csv.Error, ValueError) as exc:
        error = f"Failed to write {csv_path}: {exc}"
        log.error(error)
        try:
            csv_path.unlink(missing_ok=True)
        except OSError:
            log.debug("Could not remove partial file %s", csv_path)
        return TableWriteResult(path=None, error=error)

    log.info("Wrote %s rows to %s", len(records), csv_path)
    return TableWriteResult(path=csv_path)


# ---------------------------------------------------------------------------
# Run report
# ---------------------------------------------------------------------------


def format_elapsed(seconds: float) -> str:
    """``12.3 seconds`` below a minute, ``1.5 minutes`` from there on."""
    if seconds < 60:
        return f"{seconds:.1f} seconds"
    return f"{seconds / 60:.1f} minutes"


def describe_log_level(level_name: str) -> str:
    return f"{level_name} (set via {LOG_LEVEL_ENV_VAR}; defaults to warn)"


def build_run_report(
    *,
    datetime_stamp: str,
    elapsed_seconds: float,
    source_dir: Path,
    output_dir: Path,
    log_level_name: str,
    csv_path: Optional[Path],
    extracted_count: int,
    rejected_count: int,
    error_paths: list[Path],
) -> RunReport:
    return RunReport(
        datetime_stamp=datetime_stamp,
        elapsed_time=format_elapsed(elapsed_seconds),
        source_dir_path=str(source_dir),
        output_dir_path=str(output_dir),
        log_level=describe_log_level(log_level_name),
        output_csv_path=str(csv_path) if csv_path is not None else None,
        ocr_data_vector_count=extracted_count,
        rejected_files_count=rejected_count,
        error_files=[str(p) for p in error_paths],
    )


def render_run_report(report: RunReport) -> str:
    """Pretty-print *report* as JSON in field order.

    Returns an error message instead of raising if serialization fails.
    """
    try:
        return json.dumps(asdict(report), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        log.error("Could not serialize run report: %s", exc)
        return f"Error serializing run report: {exc}"


def save_run_report(output_dir: Path, datetime_stamp: str, text: str) -> Path:
    """Persist rendered report text next to the CSV and return its path."""
    path = output_dir / make_output_filename(
        datetime_stamp, prefix=REPORT_FILE_PREFIX, suffix=".json"
    )
    path.write_text(text + "\n", encoding="utf-8")
    return path
