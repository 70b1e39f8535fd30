"""ViewModel for loading a roll log and dispatching reports."""

from __future__ import annotations

from typing import TextIO

from loguru import logger

from app.views.log_report import render_log
from app.views.report_table import ReportConfig
from app.views.stock_report import render_stock
from app.views.tags_report import render_tags
from core.models import FilmLog
from infrastructure.roll_log_repository import RollLogRepository

MODE_LOG = "log"
MODE_STOCK = "stock"
MODE_TAGS = "tags"
MODES = (MODE_LOG, MODE_STOCK, MODE_TAGS)


class MainVM:
    """Main application view-model.

    Mediates between a repository providing a `FilmLog` and the report views.
    """

    def __init__(self, repo: RollLogRepository | None = None) -> None:
        self._repo = repo or RollLogRepository()
        self.log: FilmLog | None = None

    def load(self, path: str) -> FilmLog:
        """Parse the roll log at `path` and keep it for rendering."""
        self.log = self._repo.load(path)
        logger.info("Loaded {}: {}", path, self.log.counts)
        return self.log

    def render(self, mode: str, out: TextIO, conf: ReportConfig) -> None:
        """Write the report selected by `mode` to `out`."""
        if self.log is None:
            raise RuntimeError("no roll log loaded")
        if mode == MODE_LOG:
            render_log(self.log, out, conf)
        elif mode == MODE_STOCK:
            render_stock(self.log, out, conf)
        elif mode == MODE_TAGS:
            render_tags(self.log, out, conf.id_filter)
        else:
            raise ValueError(f"invalid mode '{mode}'")
