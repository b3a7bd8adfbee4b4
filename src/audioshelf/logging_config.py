"""Logging setup for the ``audioshelf`` command line.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the CLI. Console output goes through rich's
``RichHandler`` on stderr so it never mixes with JSON written to stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "audioshelf"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | Path | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure the ``audioshelf`` logger.

    Args:
        verbose: Log at DEBUG.
        quiet: Log warnings and errors only. Ignored when ``verbose``.
        log_file: Optional file that receives every record at DEBUG.
        propagate: Let records reach the root logger (useful for testing).

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    logger.propagate = propagate
    return logger
