"""Key -> pid lookup built from ingest-complete tracker files."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .models import IngestTracker
from .sources import parse_key_from_path

log = logging.getLogger(__name__)


def load_ingest_tracker(path: Path) -> Optional[tuple[str, str]]:
    """Return ``(key, pid)`` for one ingest tracker, or None if unusable.

    Failures are logged at debug only; they never reach the run report.
    """
    key = parse_key_from_path(path)
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("Error reading file %s: %s", path, exc)
        return None
    try:
        tracker = IngestTracker.model_validate_json(contents)
    except ValidationError as exc:
        log.debug("Error parsing JSON from %s: %s", path, exc)
        return None
    return key, tracker.pid


def make_id_to_pid_map(
    file_paths: list[Path],
    *,
    max_workers: int = 1,
) -> dict[str, str]:
    """Build the key -> pid map from ingest-complete paths.

    Files are read in parallel when ``max_workers > 1`` but merged in input
    order, so for duplicate keys the last path in *file_paths* wins.
    """
    if max_workers <= 1 or len(file_paths) <= 1:
        loaded = [load_ingest_tracker(path) for path in file_paths]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            loaded = list(executor.map(load_ingest_tracker, file_paths))

    id_to_pid: dict[str, str] = {}
    for entry in loaded:
        if entry is None:
            continue
        key, pid = entry
        if key in id_to_pid and id_to_pid[key] != pid:
            log.debug("Duplicate key %s: %s replaces %s", key, pid, id_to_pid[key])
        id_to_pid[key] = pid

    log.debug("id_to_pid_map, ``%s``", id_to_pid)
    log.info(
        "Identifier map: %s keys from %s ingest trackers",
        len(id_to_pid),
        len(file_paths),
    )
    return id_to_pid
