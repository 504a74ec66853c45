"""Shared data models for the tracker pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict

# Legacy tracker files write "-" where a numeric value was unavailable.
DASH_PLACEHOLDER = "-"


def _dash_as_int(value: Any) -> Any:
    return 0 if value == DASH_PLACEHOLDER else value


def _dash_as_float(value: Any) -> Any:
    return 0.0 if value == DASH_PLACEHOLDER else value


DashInt = Annotated[int, BeforeValidator(_dash_as_int)]
DashFloat = Annotated[float, BeforeValidator(_dash_as_float)]


class FileCategory(str, Enum):
    """Filename-derived category of a file found under the source root."""

    OCR_COMPLETE = "ocr_complete"
    INGEST_COMPLETE = "ingest_complete"
    ERROR_NAMED = "error_named"
    OTHER = "other"


@dataclass
class ClassifiedPaths:
    """Every regular file under a root, split into the four categories."""

    ocr_complete: list[Path] = field(default_factory=list)
    ingest_complete: list[Path] = field(default_factory=list)
    error_named: list[Path] = field(default_factory=list)
    other: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.ocr_complete)
            + len(self.ingest_complete)
            + len(self.error_named)
            + len(self.other)
        )


class IngestTracker(BaseModel):
    """An ``*-ingest_complete.json`` tracker; only the pid matters."""

    model_config = ConfigDict(strict=True, extra="ignore")

    pid: str


class OcrRecord(BaseModel):
    """One ``*-ocr_complete.json`` tracker, plus the enrichment fields.

    Field order is the column order of the output CSV.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    orientation: DashInt
    orientation_conf: DashFloat
    script: str
    script_conf: DashFloat
    image_name: str
    word_count: int
    average_confidence: float
    high_conf_ratio: float
    mid_conf_ratio: float
    low_conf_ratio: float
    pid: Optional[str] = None
    pid_url: Optional[str] = None


@dataclass
class ProcessingOutcome:
    """Result of reading and parsing a single OCR tracker file."""

    path: Path
    status: str = "pending"
    record: Optional[OcrRecord] = None
    error: Optional[str] = None


@dataclass
class PathResults:
    extracted: list[OcrRecord] = field(default_factory=list)
    rejected: list[Path] = field(default_factory=list)


@dataclass
class TableWriteResult:
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.path is not None and self.error is None


@dataclass
class RunReport:
    """End-of-run summary; field order is the rendered document order."""

    datetime_stamp: str
    elapsed_time: str
    source_dir_path: str
    output_dir_path: str
    log_level: str
    output_csv_path: Optional[str]
    ocr_data_vector_count: int
    rejected_files_count: int
    error_files: list[str] = field(default_factory=list)
