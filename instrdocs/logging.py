"""Logging utilities for instrdocs commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "instrdocs"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the instrdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the instrdocs logger.

    Console output always goes to stderr so that listings written to stdout
    stay machine readable. ``quiet`` drops the console to warnings; the
    optional file sink keeps the full level regardless.
    """
    file_level = logging.DEBUG if verbose else logging.INFO
    console_level = _console_level(verbose, quiet)

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(min(file_level, console_level))
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once per process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[instrdocs] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
