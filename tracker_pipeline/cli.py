"""CLI entrypoint for the OCR/ingest tracker report pipeline.

Usage:
    python -m tracker_pipeline --source_dir_path ./trackers --output_dir_path ./out
    python -m tracker_pipeline --source_dir_path ./trackers --output_dir_path ./out --save_report
    LOG_LEVEL=debug python -m tracker_pipeline --source_dir_path ./trackers --output_dir_path ./out --max_workers 1
"""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import os
import subprocess
import time
from pathlib import Path

from . import __version__

log = logging.getLogger(__name__)

PROG_NAME = "process_trackers"


def _detect_build_id() -> str:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
            timeout=2,
            cwd=Path(__file__).resolve().parent,
        )
    except (subprocess.SubprocessError, OSError):
        return "unknown"
    return completed.stdout.strip() or "unknown"


def version_string() -> str:
    return f"{PROG_NAME} {__version__} (build-{_detect_build_id()})"


def _recommended_max_workers() -> int:
    cpu_count = max(1, os.cpu_count() or 1)
    return min(32, cpu_count * 2)


def _setup_logging(*, level: int, log_file: Path | None) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG if log_file is not None else level)

    console_fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    detailed_fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)s | "
        "%(threadName)s | %(filename)s:%(lineno)d | %(message)s"
    )

    # StreamHandler defaults to stderr, keeping stdout for the report.
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(console_fmt, "%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=20 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(detailed_fmt, "%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description=(
            "Walks source_dir_path, correlates OCR and ingest tracker files, "
            "and writes a CSV report to output_dir_path."
        ),
    )
    parser.add_argument("--version", action="version", version=version_string())
    parser.add_argument(
        "-s",
        "--source_dir_path",
        type=Path,
        required=True,
        help="Root directory to scan for tracker files",
    )
    parser.add_argument(
        "-o",
        "--output_dir_path",
        type=Path,
        required=True,
        help="Directory for the CSV (and optional report) output",
    )
    parser.add_argument(
        "--max_workers",
        type=int,
        default=_recommended_max_workers(),
        help="Worker threads for reading tracker files (1 = sequential)",
    )
    parser.add_argument(
        "--save_report",
        action="store_true",
        help="Also write the run report JSON into output_dir_path",
    )
    parser.add_argument(
        "--log_file",
        type=Path,
        default=None,
        help="Optional rotating debug log file",
    )
    parser.add_argument(
        "--no_progress",
        action="store_true",
        help="Disable the progress bar",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the full pipeline and return the process exit code."""
    from .index import make_id_to_pid_map
    from .processing import process_ocr_files
    from .reporting import (
        build_run_report,
        render_run_report,
        save_run_report,
        write_tracker_csv,
    )
    from .sources import find_tracker_files
    from .utils import (
        ensure_output_dir,
        log_level_from_name,
        now_stamp,
        resolve_log_level_name,
    )

    args = parse_args(argv)
    log_level_name = resolve_log_level_name()
    _setup_logging(level=log_level_from_name(log_level_name), log_file=args.log_file)

    overall_t0 = time.perf_counter()
    datetime_stamp = now_stamp()
    max_workers = max(1, args.max_workers)
    log.info(version_string())
    log.info("source_dir_path: %s", args.source_dir_path)
    log.info("output_dir_path: %s", args.output_dir_path)
    log.info("max_workers: %s", max_workers)

    # --- Step 1: Classify files ---
    step1_t0 = time.perf_counter()
    try:
        classified = find_tracker_files(args.source_dir_path)
    except OSError as exc:
        log.error("Cannot read source directory %s: %s", args.source_dir_path, exc)
        return 1
    log.info(
        "Discovery: %s files in %.2fs",
        classified.total,
        time.perf_counter() - step1_t0,
    )

    try:
        ensure_output_dir(args.output_dir_path)
    except OSError as exc:
        log.error("Cannot create output directory %s: %s", args.output_dir_path, exc)
        return 1

    # --- Step 2: Build key -> pid map ---
    step2_t0 = time.perf_counter()
    id_to_pid = make_id_to_pid_map(classified.ingest_complete, max_workers=max_workers)
    log.info("Identifier map built in %.2fs", time.perf_counter() - step2_t0)

    # --- Step 3: Process OCR trackers ---
    results = process_ocr_files(
        classified.ocr_complete,
        id_to_pid,
        max_workers=max_workers,
        progress=not args.no_progress,
    )

    # --- Step 4: Write CSV ---
    table = write_tracker_csv(results.extracted, args.output_dir_path, datetime_stamp)
    if not table.ok:
        log.warning("Continuing without an output table: %s", table.error)

    # --- Step 5: Report ---
    report = build_run_report(
        datetime_stamp=datetime_stamp,
        elapsed_seconds=time.perf_counter() - overall_t0,
        source_dir=args.source_dir_path,
        output_dir=args.output_dir_path,
        log_level_name=log_level_name,
        csv_path=table.path,
        extracted_count=len(results.extracted),
        rejected_count=len(results.rejected),
        error_paths=classified.error_named,
    )
    rendered = render_run_report(report)
    print(rendered)

    if args.save_report:
        try:
            report_path = save_run_report(args.output_dir_path, datetime_stamp, rendered)
            log.info("Run report saved to %s", report_path)
        except OSError as exc:
            log.warning("Could not save run report: %s", exc)

    if results.rejected:
        log.warning("Rejected files: %s", len(results.rejected))
        for path in results.rejected:
            log.debug("  - %s", path)
    return 0
