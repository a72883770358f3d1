"""
Logging configuration for unsafe-ratio.

Diagnostics go to stderr through rich so that stdout stays reserved for the
per-file ratio lines. The level follows the resolved ``verbosity`` setting,
so a ``verbosity`` key in ``unsafe-ratio.toml`` works the same as ``-v``/``-q``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# verbosity setting -> level of the unsafe_ratio logger
LOG_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route unsafe_ratio logs to a rich stderr handler and, optionally, a file.

    Args:
        verbosity: One of "quiet", "normal", "verbose"
        log_file: Append plain-text logs to this file as well

    Returns:
        The configured unsafe_ratio logger

    Raises:
        ValueError: If verbosity is not a known setting
    """
    if verbosity not in LOG_LEVELS:
        raise ValueError(f"Unknown verbosity: {verbosity!r}")
    level = LOG_LEVELS[verbosity]
    debug = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_time=debug,
            show_path=debug,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("unsafe_ratio")
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the unsafe_ratio logger, or a child of it for ``name``."""
    if name is None:
        return logging.getLogger("unsafe_ratio")

    if not name.startswith("unsafe_ratio"):
        name = f"unsafe_ratio.{name}"

    return logging.getLogger(name)
