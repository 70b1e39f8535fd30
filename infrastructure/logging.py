"""Logging initialization utilities using loguru."""

from __future__ import annotations

from pathlib import Path
import sys

from loguru import logger

STDERR_FORMAT = "<level>{level: <8}</level> | {message}"


def init_logging(verbose: bool = False, log_dir: str | None = None) -> None:
    """Route loguru output to stderr and, optionally, a rotating file.

    Args:
        verbose: Log DEBUG and up to stderr instead of WARNING and up.
        log_dir: Directory for daily rotating log files; no file sink if None.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=STDERR_FORMAT,
        level="DEBUG" if verbose else "WARNING",
        backtrace=False,
        diagnose=False,
    )

    if log_dir is None:
        return
    log_path = Path(log_dir).expanduser()
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_path / "rolls_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        level="DEBUG",
    )
