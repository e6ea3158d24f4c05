"""Prepare a clean working copy of the client repository."""

from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import Callable, List, Tuple

from .errors import raise_if_cancelled
from .git import GitClient
from .logging import get_logger
from .models import CleanReport, SpecDocument, WorkingRepository
from .settings import RefreshSettings


def _unlink(path: Path) -> None:
    path.unlink(missing_ok=True)


def _depth_key(path: Path) -> Tuple[int, int]:
    return (len(path.parts), len(str(path)))


class RepositoryStager:
    """Clones the target repository and places the normalized spec in it."""

    def __init__(
        self,
        settings: RefreshSettings | None = None,
        *,
        git: GitClient | None = None,
        file_remover: Callable[[Path], None] | None = None,
    ) -> None:
        self.settings = settings or RefreshSettings()
        self.git = git or GitClient()
        self._remove_file = file_remover or _unlink
        self.logger = get_logger("stager")

    def stage(
        self,
        spec: SpecDocument,
        cancel_event: threading.Event | None = None,
    ) -> WorkingRepository:
        """Clone a fresh working copy and move ``spec`` to its conventional path."""
        root = self.git.clone_to_temp_directory(self.settings.repository_url)
        raise_if_cancelled(cancel_event)

        repository = self.describe(root)
        repository.spec_path.unlink(missing_ok=True)
        shutil.move(str(spec.path), str(repository.spec_path))
        self.logger.info("Staged spec at %s", repository.spec_path)
        return repository

    def describe(self, root: Path) -> WorkingRepository:
        source_dir = root / self.settings.source_dir_name
        return WorkingRepository(
            root=root,
            source_dir=source_dir,
            spec_path=root / self.settings.spec_file_name,
            project_path=source_dir / self.settings.project_file_name,
        )

    def clean(
        self,
        repository: WorkingRepository,
        cancel_event: threading.Event | None = None,
    ) -> CleanReport:
        raise_if_cancelled(cancel_event)
        return self.clean_source_directory(repository.source_dir)

    def clean_source_directory(self, directory: Path) -> CleanReport:
        """Delete everything under ``directory`` except project descriptors.

        Individual deletion failures are logged and skipped. Empty directories
        are removed deepest first so a parent emptied by its children goes in
        the same pass. An enumeration error marks the report incomplete instead
        of aborting the run.
        """
        report = CleanReport(directory=directory, deleted_files=[], deleted_directories=[], failures=[])
        if not directory.is_dir():
            self.logger.warning("Directory does not exist: %s", directory)
            report.completed = False
            return report

        keep_suffix = self.settings.descriptor_extension.lower()
        try:
            files = sorted(path for path in directory.rglob("*") if path.is_file())
            for path in files:
                if path.name.lower().endswith(keep_suffix):
                    continue
                try:
                    self._remove_file(path)
                except Exception as exc:
                    self.logger.error("Failed to delete file: %s", path, exc_info=True)
                    report.failures.append((path, str(exc)))
                    continue
                self.logger.info("Deleted file: %s", path)
                report.deleted_files.append(path)

            directories: List[Path] = [path for path in directory.rglob("*") if path.is_dir()]
            for path in sorted(directories, key=_depth_key, reverse=True):
                try:
                    if path.is_dir() and not any(path.iterdir()):
                        path.rmdir()
                        self.logger.info("Deleted empty directory: %s", path)
                        report.deleted_directories.append(path)
                except Exception as exc:
                    self.logger.error("Failed to delete directory: %s", path, exc_info=True)
                    report.failures.append((path, str(exc)))
        except Exception:
            self.logger.error("An error occurred while cleaning the directory: %s", directory, exc_info=True)
            report.completed = False

        return report


__all__ = ["RepositoryStager"]
