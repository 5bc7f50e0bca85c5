"""
Centralized logging setup for the patrol engine and its command line.

Game text goes to stdout through the OutputWriter, so log records go to
stderr (plus an optional file) and never interleave with the transcript.

Call configure_logging() once at startup, then take a module logger:

    configure_logging("DEBUG", logfile=None)
    log = get_logger(__name__)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union

from infra.paths import DEFAULT_LOG_FILE

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"
JSON_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","line":%(lineno)d,"msg":"%(message)s"}'
)


def configure_logging(
    level: Union[str, int] = "WARNING",
    *,
    json: bool = False,
    logfile: str | Path | None = DEFAULT_LOG_FILE,
) -> None:
    """
    Route the root logger to stderr and, optionally, a log file.

    Args:
        level: Logging level name or int (e.g., "DEBUG", logging.INFO).
        json: Emit JSON lines when True; otherwise a human-friendly format.
        logfile: File to append records to; None keeps logging on stderr only.
    """
    formatter = logging.Formatter(JSON_FORMAT if json else DEFAULT_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stderr_handler]

    if logfile is not None:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Namespaced logger for a patrol module."""
    return logging.getLogger(name)
