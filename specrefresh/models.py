"""Core data models handed between pipeline stages."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SpecDocument:
    """An OpenAPI document saved at a temporary location."""

    path: Path
    content: str


@dataclass(frozen=True)
class WorkingRepository:
    """Fresh clone of the target client repository owned by one run."""

    root: Path
    source_dir: Path
    spec_path: Path
    project_path: Path


@dataclass
class CleanReport:
    """Outcome of the source directory cleaning pass."""

    directory: Path
    deleted_files: List[Path]
    deleted_directories: List[Path]
    failures: List[Tuple[Path, str]]
    completed: bool = True


@dataclass(frozen=True)
class BuildOutcome:
    """Result of restoring and building the generated project."""

    success: bool


@dataclass(frozen=True)
class RunOutcome:
    """Terminal state of a refresh run."""

    repository: WorkingRepository
    build: BuildOutcome
    published: bool
    clean_report: Optional[CleanReport] = None
