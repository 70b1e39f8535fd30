"""The "stock" report: roll counts per film stock and where each is loaded."""

from __future__ import annotations

from typing import TextIO

from app.views.columns import Column
from app.views.constants import (
    MARKDOWN_SEP_LEFT,
    MARKDOWN_SEP_RIGHT,
    STOCK_HEADERS,
    STOCK_RIGHT_ALIGNED,
)
from app.views.report_table import ReportConfig, RowBuilder, write_table
from app.views.table import Table
from core.models import FilmLog
from core.services.roll_service import StockSummary, stock_summary


def _row_values(log: FilmLog, summary: StockSummary) -> dict[str, str]:
    stock = summary.stock
    camera = ""
    if summary.camera is not None:
        camera = f"{summary.camera.id} {summary.camera.brand} {summary.camera.model}"
    return {
        "available": str(summary.available),
        "shot": str(summary.shot),
        "total": str(summary.total),
        "stock_id": str(stock.id),
        "company": log.company_of(stock).name,
        "stock": stock.name,
        "iso": str(stock.iso),
        "camera": camera,
    }


def _build_row(conf: ReportConfig, values: dict[str, str]) -> list[Column]:
    b = RowBuilder(conf)
    b.cell(values["available"], right=True).line()
    b.cell(values["shot"], right=True).line()
    b.cell(values["total"], right=True).line()
    b.cell(values["stock_id"]).space()
    b.cell(values["company"]).space()
    b.cell(values["stock"]).space()
    b.cell(values["iso"]).line()
    b.cell(values["camera"])
    return b.finish()


def build_stock_table(log: FilmLog, conf: ReportConfig) -> Table:
    """Assemble the stock summary table, sorted by stock name."""
    table = Table()
    if conf.header:
        table.set_header(_build_row(conf, STOCK_HEADERS))
    if conf.header_sep:
        seps = {
            key: MARKDOWN_SEP_RIGHT if key in STOCK_RIGHT_ALIGNED else MARKDOWN_SEP_LEFT
            for key in STOCK_HEADERS
        }
        table.add_row(*_build_row(conf, seps))
    for summary in stock_summary(log):
        table.add_row(*_build_row(conf, _row_values(log, summary)))
    return table


def render_stock(log: FilmLog, out: TextIO, conf: ReportConfig) -> None:
    """Write the stock summary for `log` to `out`."""
    write_table(build_stock_table(log, conf), out, conf)
