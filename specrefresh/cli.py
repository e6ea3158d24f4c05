"""CLI entrypoint for a refresh run."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from pathlib import Path

from .errors import RefreshError, RunCancelled
from .logging import configure_logging, get_logger
from .pipeline import RefreshPipeline, build_pipeline


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="specrefresh",
        description="Refresh the generated TrustedForm certificates client from its published OpenAPI spec.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None, *, pipeline: RefreshPipeline | None = None) -> None:
    """Run the refresh pipeline once and exit non-zero on failure."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    cancel_event = threading.Event()
    previous_handler = None
    if threading.current_thread() is threading.main_thread():
        previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: cancel_event.set())

    runner = pipeline or build_pipeline()
    try:
        outcome = runner.run(cancel_event)
    except RunCancelled:
        logger.warning("Refresh run cancelled")
        parser.exit(1, "specrefresh cancelled\n")
    except RefreshError as exc:
        logger.error("Refresh failed: %s", exc, exc_info=bool(args.verbose))
        parser.exit(1, f"specrefresh failed: {exc}\n")
    except Exception as exc:
        logger.exception("Refresh failed unexpectedly: %s", exc)
        parser.exit(1, f"specrefresh failed: {exc}\nRun with --verbose for more details.\n")
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    if not outcome.build.success:
        print("Build was not successful; nothing published")
    elif outcome.published:
        print(f"Published refreshed client from {outcome.repository.root}")
    else:
        print("Client already up to date")


if __name__ == "__main__":
    main(sys.argv[1:])
