"""Temporary path helpers."""

from __future__ import annotations

import tempfile
import uuid
from pathlib import Path


def random_temp_file_path(extension: str) -> Path:
    """Return a unique, not yet created file path in the system temp directory."""
    suffix = extension.lstrip(".")
    name = uuid.uuid4().hex
    if suffix:
        name = f"{name}.{suffix}"
    return Path(tempfile.gettempdir()) / name


def make_temp_directory(prefix: str = "specrefresh-") -> Path:
    """Create and return a fresh, uniquely named temp directory."""
    return Path(tempfile.mkdtemp(prefix=prefix))


__all__ = ["make_temp_directory", "random_temp_file_path"]
