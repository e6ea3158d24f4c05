"""Opaque external process execution."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from .logging import get_logger

MISSING_EXECUTABLE_EXIT_CODE = 127


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a finished process."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


ProcessCallable = Callable[[Sequence[str], Optional[Path]], ProcessResult]


class ProcessRunner:
    """Runs a named executable synchronously and reports its exit code."""

    def __init__(self, runner: ProcessCallable | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("process")

    def execute(
        self,
        name: str,
        working_dir: Path | str | None,
        args: Sequence[str],
    ) -> ProcessResult:
        """Run ``name`` with ``args`` in ``working_dir`` and wait for it to exit."""
        command = [name, *args]
        cwd = Path(working_dir) if working_dir is not None else None
        self.logger.debug("Running %s (cwd=%s)", " ".join(command), cwd or ".")
        result = self._runner(command, cwd)
        if result.ok:
            self.logger.debug("%s exited with code 0", name)
        else:
            self.logger.debug("%s exited with code %d", name, result.exit_code)
        return result

    @staticmethod
    def _default_runner(command: Sequence[str], cwd: Optional[Path]) -> ProcessResult:
        try:
            completed = subprocess.run(
                list(command),
                cwd=str(cwd) if cwd is not None else None,
                check=False,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            return ProcessResult(
                exit_code=MISSING_EXECUTABLE_EXIT_CODE,
                stderr=f"Unable to locate '{command[0]}': {exc}",
            )
        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


class DotnetToolchain:
    """Restore and build wrappers around the ``dotnet`` CLI."""

    def __init__(self, runner: ProcessRunner | None = None, executable: str = "dotnet") -> None:
        self.runner = runner or ProcessRunner()
        self.executable = executable

    def restore(self, project_path: Path) -> ProcessResult:
        return self.runner.execute(
            self.executable,
            project_path.parent,
            ["restore", str(project_path)],
        )

    def build(self, project_path: Path, configuration: str = "Release") -> ProcessResult:
        return self.runner.execute(
            self.executable,
            project_path.parent,
            ["build", str(project_path), "--configuration", configuration, "--no-restore"],
        )

    def build_succeeded(self, project_path: Path, configuration: str = "Release") -> bool:
        return self.build(project_path, configuration).ok


__all__ = [
    "DotnetToolchain",
    "MISSING_EXECUTABLE_EXIT_CODE",
    "ProcessCallable",
    "ProcessResult",
    "ProcessRunner",
]
