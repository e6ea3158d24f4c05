"""Run-scoped logging for refresh pipelines."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

_LOGGER_NAME = "specrefresh"
CONSOLE_FORMAT = "[specrefresh %(run_id)s] %(levelname)s %(stage)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(run_id)s %(levelname)s %(stage)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for one pipeline stage (``fetcher``, ``stager``...)."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class StageFilter(logging.Filter):
    """Stamps records with the emitting stage and the id of the current run."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{_LOGGER_NAME}."
        record.stage = record.name[len(prefix):] if record.name.startswith(prefix) else "run"
        record.run_id = self.run_id
        return True


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    run_id: str | None = None,
) -> logging.Logger:
    """Send specrefresh records to stderr, and to ``log_file`` when given, tagged by run."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stage_filter = StageFilter(run_id or new_run_id())

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(stage_filter)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(stage_filter)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["StageFilter", "configure_logging", "get_logger", "new_run_id"]
