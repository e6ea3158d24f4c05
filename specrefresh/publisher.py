"""Build the regenerated client and publish it on success."""

from __future__ import annotations

import threading
from typing import Mapping, Optional

from .errors import RestoreFailed, raise_if_cancelled
from .git import GitClient
from .logging import get_logger
from .models import BuildOutcome, WorkingRepository
from .process import DotnetToolchain
from .settings import RefreshSettings, require_env


class BuildPublisher:
    """Restores and builds the project; commits and pushes only if the build passed."""

    def __init__(
        self,
        settings: RefreshSettings | None = None,
        *,
        toolchain: DotnetToolchain | None = None,
        git: GitClient | None = None,
    ) -> None:
        self.settings = settings or RefreshSettings()
        self.toolchain = toolchain or DotnetToolchain()
        self.git = git or GitClient()
        self.logger = get_logger("publisher")

    def build(
        self,
        repository: WorkingRepository,
        cancel_event: threading.Event | None = None,
    ) -> BuildOutcome:
        project = repository.project_path
        restore = self.toolchain.restore(project)
        if not restore.ok:
            self.logger.error("Restore of %s failed with exit code %d", project, restore.exit_code)
            raise RestoreFailed(
                f"dotnet restore failed with exit code {restore.exit_code}: {restore.stderr.strip()}",
                exit_code=restore.exit_code,
                stderr=restore.stderr,
            )
        raise_if_cancelled(cancel_event)

        success = self.toolchain.build_succeeded(project, self.settings.build_configuration)
        return BuildOutcome(success=success)

    def publish(self, repository: WorkingRepository, token: str) -> bool:
        """Commit and push the working copy using ``token``."""
        return self.git.commit_and_push(
            repository.root,
            self.settings.commit_message,
            token,
            self.settings.author_name,
            self.settings.author_email,
        )

    def build_and_publish(
        self,
        repository: WorkingRepository,
        *,
        environ: Optional[Mapping[str, str]] = None,
        cancel_event: threading.Event | None = None,
    ) -> tuple[BuildOutcome, bool]:
        """Return the build outcome and whether anything was pushed."""
        outcome = self.build(repository, cancel_event)
        if not outcome.success:
            self.logger.error("Build was not successful, exiting...")
            return outcome, False

        token = require_env(self.settings.token_env_var, environ)
        raise_if_cancelled(cancel_event)
        return outcome, self.publish(repository, token)


__all__ = ["BuildPublisher"]
