"""Regenerate the client sources with Kiota."""

from __future__ import annotations

import threading
from typing import List

from .errors import GenerationFailed, raise_if_cancelled
from .logging import get_logger
from .models import WorkingRepository
from .process import ProcessResult, ProcessRunner
from .settings import RefreshSettings


class ClientGenerator:
    """Updates the generator tool and runs it against the staged spec."""

    def __init__(
        self,
        settings: RefreshSettings | None = None,
        *,
        runner: ProcessRunner | None = None,
        dotnet: str = "dotnet",
        kiota: str = "kiota",
    ) -> None:
        self.settings = settings or RefreshSettings()
        self.runner = runner or ProcessRunner()
        self.dotnet = dotnet
        self.kiota = kiota
        self.logger = get_logger("generator")

    def ensure_tool(self) -> None:
        result = self.runner.execute(
            self.dotnet,
            None,
            ["tool", "update", "--global", self.settings.generator_package],
        )
        self._check(result, "Generator tool update")

    def generation_args(self, repository: WorkingRepository) -> List[str]:
        return [
            "generate",
            "-l",
            self.settings.generator_language,
            "-d",
            str(repository.spec_path),
            "-o",
            self.settings.source_dir_name,
            "-c",
            self.settings.client_name,
            "-n",
            self.settings.library,
            "--ebc",
            "--cc",
        ]

    def generate(
        self,
        repository: WorkingRepository,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.ensure_tool()
        raise_if_cancelled(cancel_event)

        self.logger.info("Generating %s into %s", self.settings.client_name, repository.source_dir)
        result = self.runner.execute(self.kiota, repository.root, self.generation_args(repository))
        self._check(result, "Client generation")

    def _check(self, result: ProcessResult, step: str) -> None:
        if result.ok:
            return
        self.logger.error("%s exited with code %d", step, result.exit_code)
        raise GenerationFailed(
            f"{step} failed with exit code {result.exit_code}: {result.stderr.strip()}",
            exit_code=result.exit_code,
            stderr=result.stderr,
        )


__all__ = ["ClientGenerator"]
