"""Logging utilities for jsdocgen runs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

_LOGGER_NAME = "jsdocgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the jsdocgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler (and optional file sink) on the jsdocgen logger.

    ``quiet`` wins over ``verbose`` and limits console output to warnings.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once per process.
    for handler in list(logger.handlers):
        if not isinstance(handler, DiagnosticsHandler):
            logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[jsdocgen] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


class DiagnosticsHandler(logging.Handler):
    """Collects warning records emitted while extracting a batch of files."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@contextmanager
def capture_diagnostics(name: str = "extraction") -> Iterator[DiagnosticsHandler]:
    """Attach a :class:`DiagnosticsHandler` to ``jsdocgen.<name>`` for the block."""
    logger = get_logger(name)
    handler = DiagnosticsHandler()
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)


__all__ = ["DiagnosticsHandler", "capture_diagnostics", "configure_logging", "get_logger"]
