"""Failure taxonomy for the refresh pipeline."""

from __future__ import annotations

import threading


class RefreshError(RuntimeError):
    """Base class for fatal pipeline failures."""


class NavigationTimeout(RefreshError):
    """Raised when the documentation page never reaches network idle."""


class DownloadNotTriggered(RefreshError):
    """Raised when clicking the download element does not start a download."""


class FormatError(RefreshError):
    """Raised when the downloaded document is not parseable as JSON."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class ProcessFailure(RefreshError):
    """Base for failures reported by an external process."""

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class CloneFailed(ProcessFailure):
    """Raised when the target repository cannot be cloned."""


class GenerationFailed(ProcessFailure):
    """Raised when the code generator (or its installer) exits non-zero."""


class RestoreFailed(ProcessFailure):
    """Raised when dependency restore of the generated project fails."""


class PushFailed(ProcessFailure):
    """Raised when committing or pushing the working copy fails."""


class MissingCredential(RefreshError):
    """Raised when a required environment variable is absent or blank."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Required environment variable '{name}' is not set")
        self.name = name


class RunCancelled(RefreshError):
    """Raised when the run's cancellation signal has been set."""


def raise_if_cancelled(cancel_event: threading.Event | None) -> None:
    """Abort the current run when ``cancel_event`` has been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise RunCancelled("Refresh run was cancelled")


__all__ = [
    "CloneFailed",
    "DownloadNotTriggered",
    "FormatError",
    "GenerationFailed",
    "MissingCredential",
    "NavigationTimeout",
    "ProcessFailure",
    "PushFailed",
    "RefreshError",
    "RestoreFailed",
    "RunCancelled",
    "raise_if_cancelled",
]
