"""Utilities for log date parsing/formatting and terminal size detection.

Dates in the roll log are strict `YYYY-MM-DD` tokens interpreted as UTC
midnight. `looks_like_date` separates "this is meant to be a date" from
"this is a valid date" so the parser can report bad calendar dates instead of
treating them as unknown keywords.
"""

from __future__ import annotations

from datetime import datetime, timezone
import re
import shutil

from loguru import logger

from core.models import DATE_FORMAT

_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")

MIN_TERMINAL_WIDTH = 80
TERMINAL_MARGIN = 5


def looks_like_date(token: str) -> bool:
    """Return True when `token` has the `YYYY-MM-DD` shape."""
    return _DATE_SHAPE.fullmatch(token) is not None


def parse_log_date(token: str) -> datetime:
    """Parse a `YYYY-MM-DD` token as UTC midnight.

    Raises:
        ValueError: if the token is not a zero-padded calendar date.
    """
    if not looks_like_date(token):
        raise ValueError(f"not a YYYY-MM-DD date: '{token}'")
    return datetime.strptime(token, DATE_FORMAT).replace(tzinfo=timezone.utc)


def format_log_date(dt: datetime | None) -> str:
    """Format a date for reports; empty string when None."""
    return dt.strftime(DATE_FORMAT) if dt else ""


def terminal_width() -> int:
    """Best-effort usable terminal width.

    Returns 0 when the size cannot be determined, which disables stretching.
    Narrow terminals are widened to `MIN_TERMINAL_WIDTH`.
    """
    size = shutil.get_terminal_size(fallback=(0, 0))
    if size.columns <= 0:
        logger.debug("terminal size unavailable")
        return 0
    width = size.columns - TERMINAL_MARGIN
    return max(width, MIN_TERMINAL_WIDTH)
