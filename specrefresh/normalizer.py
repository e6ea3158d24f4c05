"""Deterministic pretty-printing of the downloaded spec."""

from __future__ import annotations

import json
import threading
from pathlib import Path

from .errors import FormatError, raise_if_cancelled
from .logging import get_logger
from .models import SpecDocument
from .paths import random_temp_file_path

INDENT = 2


def format_json(content: str) -> str:
    """Return ``content`` re-serialised as indented JSON, keeping member order."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Spec is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
    return json.dumps(parsed, indent=INDENT, ensure_ascii=False) + "\n"


class SpecNormalizer:
    """Writes a formatted copy of a spec next to, never over, the original."""

    def __init__(self) -> None:
        self.logger = get_logger("normalizer")

    def normalize(
        self,
        source: Path | SpecDocument,
        cancel_event: threading.Event | None = None,
    ) -> SpecDocument:
        raw_path = source.path if isinstance(source, SpecDocument) else Path(source)
        payload = raw_path.read_bytes()
        raise_if_cancelled(cancel_event)

        try:
            content = payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            self.logger.error("Spec at %s is not valid UTF-8: %s", raw_path, exc)
            raise FormatError(f"Spec is not valid UTF-8: {exc.reason}", source=str(raw_path)) from exc

        try:
            formatted = format_json(content)
        except FormatError as exc:
            self.logger.error("Failed to format spec at %s: %s", raw_path, exc)
            raise FormatError(str(exc), source=str(raw_path)) from exc

        destination = random_temp_file_path("json")
        destination.write_text(formatted, encoding="utf-8")
        self.logger.info("Wrote normalized spec to %s", destination)
        return SpecDocument(path=destination, content=formatted)


__all__ = ["INDENT", "SpecNormalizer", "format_json"]
