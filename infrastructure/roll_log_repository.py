"""File access for roll logs.

Opens UTF-8 text and hands the lines to the parser. Read and decode failures
are reported as `InputReadError` so callers handle a single error family.
"""

from __future__ import annotations

import io
from pathlib import Path

from loguru import logger

from core.errors import InputReadError
from core.models import FilmLog
from infrastructure.roll_log_parser import RollLogParser

DEFAULT_LOG_FILE = "./rolls.log"


class RollLogRepository:
    """Load a `FilmLog` from a file or from text."""

    def load(self, path: str | Path) -> FilmLog:
        """Parse the roll log at `path`.

        Raises:
            InputReadError: if the file cannot be opened, read or decoded.
            RollLogError: for any parse error.
        """
        log_path = Path(path)
        logger.debug("Opening {}", log_path)
        parser = RollLogParser()
        try:
            with log_path.open("r", encoding="utf-8") as f:
                return parser.parse(f)
        except (OSError, UnicodeDecodeError) as ex:
            raise InputReadError(f"cannot read {log_path}: {ex}") from ex

    def parse_text(self, text: str) -> FilmLog:
        """Parse a roll log held in memory."""
        return RollLogParser().parse(io.StringIO(text))
