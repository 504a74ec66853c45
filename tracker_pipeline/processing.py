"""Parse OCR tracker files and enrich them with ingest pids."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from .models import OcrRecord, PathResults, ProcessingOutcome
from .sources import parse_key_from_path
from .utils import REPOSITORY_HOST

log = logging.getLogger(__name__)


def parse_ocr_record(contents: str) -> OcrRecord:
    """Validate tracker JSON text; raises ``pydantic.ValidationError``."""
    return OcrRecord.model_validate_json(contents)


def build_pid_url(pid: str, host: str = REPOSITORY_HOST) -> str:
    # The leading space is kept for compatibility with existing reports.
    return f" https://{host}/studio/item/{pid}/"


def enrich_record(
    record: OcrRecord,
    id_to_pid: Mapping[str, str],
    key: str,
) -> OcrRecord:
    """Return a copy of *record* with pid fields set from the lookup.

    Keys missing from the map leave both fields empty.
    """
    pid = id_to_pid.get(key)
    if pid is None:
        return record.model_copy(update={"pid": None, "pid_url": None})
    return record.model_copy(update={"pid": pid, "pid_url": build_pid_url(pid)})


def process_ocr_file(path: Path, id_to_pid: Mapping[str, str]) -> ProcessingOutcome:
    """Read, parse and enrich one OCR tracker.

    Never raises; unreadable or malformed files come back as rejections.
    """
    outcome = ProcessingOutcome(path=path)
    key = parse_key_from_path(path)

    try:
        contents = path.read_text(encoding="utf-8")
        record = parse_ocr_record(contents)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        outcome.status = "rejected"
        outcome.error = str(exc)
        log.debug("Rejected %s: %s", path, exc)
        return outcome

    outcome.record = enrich_record(record, id_to_pid, key)
    outcome.status = "success"
    return outcome


def collect_outcomes(outcomes: list[ProcessingOutcome]) -> PathResults:
    """Split outcomes into extracted records and rejected paths, path-sorted."""
    results = PathResults()
    for outcome in sorted(outcomes, key=lambda o: o.path):
        if outcome.status == "success" and outcome.record is not None:
            results.extracted.append(outcome.record)
        else:
            results.rejected.append(outcome.path)
    return results


def process_ocr_files(
    file_paths: list[Path],
    id_to_pid: Mapping[str, str],
    *,
    max_workers: int = 1,
    progress: bool = True,
) -> PathResults:
    """Process every OCR tracker; each path yields exactly one outcome."""
    from tqdm import tqdm

    t0 = time.perf_counter()
    outcomes: list[ProcessingOutcome] = []

    if max_workers <= 1 or len(file_paths) <= 1:
        for path in tqdm(file_paths, desc="Processing", disable=not progress):
            outcomes.append(process_ocr_file(path, id_to_pid))
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(process_ocr_file, path, id_to_pid): path
                for path in file_paths
            }
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Processing",
                disable=not progress,
            ):
                outcomes.append(future.result())

    results = collect_outcomes(outcomes)
    log.info(
        "Processing: %s extracted, %s rejected (%.2fs)",
        len(results.extracted),
        len(results.rejected),
        time.perf_counter() - t0,
    )
    return results
