"""The "log" report: one table row per roll entry."""

from __future__ import annotations

from typing import TextIO

from app.views.columns import Column
from app.views.constants import (
    CLR_DIM,
    CLR_LOADED,
    CLR_STOCK,
    LOADED_TEXT,
    LOG_HEADERS,
    LOG_RIGHT_ALIGNED,
    MARKDOWN_SEP_LEFT,
    MARKDOWN_SEP_RIGHT,
    NO_LAB_TEXT,
)
from app.views.report_table import ReportConfig, RowBuilder, write_table
from app.views.table import Table
from core.models import FilmLog
from core.services.roll_service import RollRow, iter_rows
from infrastructure.utils import format_log_date


def _row_values(log: FilmLog, row: RollRow) -> dict[str, str]:
    entry = row.entry
    camera = log.camera_of(entry)
    stock = log.stock_of(entry)
    lab = log.lab_of(entry)

    values = {
        "date": format_log_date(entry.load_date),
        "id": row.short_id,
        "camera_id": str(camera.id),
        "brand": camera.brand,
        "model": camera.model,
        "active": LOADED_TEXT if row.loaded else " ",
        "stock_id": str(stock.id),
        "company": log.company_of(stock).name,
        "stock": stock.name,
        "iso": str(stock.iso),
        "lab_id": NO_LAB_TEXT,
        "lab": "",
        "lab_in": "",
        "lab_out": "",
        "scan": f"{entry.scan:04d}" if entry.scan else "",
        "line": str(entry.line),
        "note": entry.note,
    }
    if not lab.is_none:
        values["lab_id"] = str(lab.id)
        values["lab"] = lab.name
        values["lab_in"] = format_log_date(entry.lab_in_date)
        values["lab_out"] = format_log_date(entry.lab_out_date)
    return values


def _build_row(conf: ReportConfig, values: dict[str, str], loaded: bool = False) -> list[Column]:
    camera_clr = CLR_LOADED if loaded else ""
    b = RowBuilder(conf)
    b.cell(values["date"]).line()
    b.cell(values["id"]).line()

    b.cell(values["camera_id"], color=CLR_DIM).space()
    b.cell(values["brand"], color=camera_clr).space()
    b.cell(values["model"], color=camera_clr).line()
    if not conf.color:
        b.cell(values["active"]).line()

    b.cell(values["stock_id"], color=CLR_DIM).space()
    b.cell(values["company"], color=CLR_STOCK).space()
    b.cell(values["stock"], color=CLR_STOCK).space()
    b.cell(values["iso"], right=True).line()

    b.cell(values["lab_id"], color=CLR_DIM).space()
    b.cell(values["lab"]).space()
    b.cell(values["lab_in"]).space()
    b.cell(values["lab_out"]).line()

    b.cell(values["scan"]).line()
    b.cell(values["line"]).line()
    b.cell(values["note"], fixed=False)
    return b.finish()


def build_log_table(log: FilmLog, conf: ReportConfig) -> Table:
    """Assemble the log report table for `log`."""
    table = Table()
    if conf.header:
        table.set_header(_build_row(conf, LOG_HEADERS))
    if conf.header_sep:
        seps = {
            key: MARKDOWN_SEP_RIGHT if key in LOG_RIGHT_ALIGNED else MARKDOWN_SEP_LEFT
            for key in LOG_HEADERS
        }
        table.add_row(*_build_row(conf, seps))
    for row in iter_rows(log, conf.id_filter):
        table.add_row(*_build_row(conf, _row_values(log, row), row.loaded))
    return table


def render_log(log: FilmLog, out: TextIO, conf: ReportConfig) -> None:
    """Write the log report for `log` to `out`."""
    write_table(build_log_table(log, conf), out, conf)
