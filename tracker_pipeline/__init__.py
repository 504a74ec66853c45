"""OCR/ingest tracker correlation and reporting pipeline.

Public API -- all symbols that tests and external code import live here.
Internally the code is split across focused submodules; this file
re-exports the stable public surface so ``from tracker_pipeline import X`` works.
"""

__version__ = "1.0.0"

from .index import load_ingest_tracker, make_id_to_pid_map
from .models import (
    ClassifiedPaths,
    FileCategory,
    IngestTracker,
    OcrRecord,
    PathResults,
    ProcessingOutcome,
    RunReport,
    TableWriteResult,
)
from .processing import (
    build_pid_url,
    collect_outcomes,
    enrich_record,
    parse_ocr_record,
    process_ocr_file,
    process_ocr_files,
)
from .reporting import (
    CSV_COLUMNS,
    build_run_report,
    describe_log_level,
    format_elapsed,
    make_output_filename,
    render_run_report,
    save_run_report,
    write_tracker_csv,
)
from .sources import classify_filename, find_tracker_files, parse_key_from_path
from .utils import (
    REPOSITORY_HOST,
    UNKNOWN_KEY,
    ensure_output_dir,
    filesystem_safe_stamp,
    now_stamp,
    resolve_log_level_name,
)

__all__ = [
    "__version__",
    # Models
    "FileCategory",
    "ClassifiedPaths",
    "IngestTracker",
    "OcrRecord",
    "ProcessingOutcome",
    "PathResults",
    "TableWriteResult",
    "RunReport",
    # Constants
    "REPOSITORY_HOST",
    "UNKNOWN_KEY",
    "CSV_COLUMNS",
    # Utils
    "resolve_log_level_name",
    "now_stamp",
    "filesystem_safe_stamp",
    "ensure_output_dir",
    # Sources
    "classify_filename",
    "find_tracker_files",
    "parse_key_from_path",
    # Index
    "load_ingest_tracker",
    "make_id_to_pid_map",
    # Processing
    "parse_ocr_record",
    "build_pid_url",
    "enrich_record",
    "process_ocr_file",
    "collect_outcomes",
    "process_ocr_files",
    # Reporting
    "make_output_filename",
    "write_tracker_csv",
    "format_elapsed",
    "describe_log_level",
    "build_run_report",
    "render_run_report",
    "save_run_report",
]
