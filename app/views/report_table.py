"""Shared configuration and row assembly for the table reports.

A report row is a flat list of columns: content cells interleaved with
separator cells. `RowBuilder` hides the per-format differences (colors,
markdown pipes, HTML without separator cells) from the individual reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from app.views.columns import (
    ANSI_RESET,
    Column,
    TermStr,
    col_align_right,
    col_fixed,
    col_pre_suf,
)
from app.views.constants import DEFAULT_SEPARATOR, MARKDOWN_SEPARATOR
from app.views.table import Table


@dataclass
class ReportConfig:
    """Output options shared by the log and stock reports."""

    id_filter: str = ""
    color: bool = False
    pretty: bool = False
    header: bool = True
    header_sep: bool = False
    separator: str = DEFAULT_SEPARATOR
    start_end_with_separator: bool = False
    width: int = 0
    html: bool = False

    @classmethod
    def markdown(cls, id_filter: str = "", header: bool = True) -> ReportConfig:
        """Plain pipe table that renders as a markdown table."""
        return cls(
            id_filter=id_filter,
            header=header,
            header_sep=True,
            separator=MARKDOWN_SEPARATOR,
            start_end_with_separator=True,
        )


class RowBuilder:
    """Builds the column list for one table row."""

    def __init__(self, conf: ReportConfig) -> None:
        self._conf = conf
        self._line = TermStr(conf.separator)
        self._space = TermStr(" ") if conf.pretty else self._line
        self.cells: list[Column] = []
        if conf.start_end_with_separator and not conf.html:
            self.cells.append(col_fixed(TermStr(conf.separator.lstrip(" "))))

    def cell(
        self,
        text: str,
        fixed: bool = True,
        right: bool = False,
        color: str = "",
    ) -> RowBuilder:
        col: Column = TermStr(text)
        if color and self._conf.color:
            col = col_pre_suf(col, color, ANSI_RESET)
        if right:
            col = col_align_right(col)
        if fixed:
            col = col_fixed(col)
        self.cells.append(col)
        return self

    def line(self) -> RowBuilder:
        if not self._conf.html:
            self.cells.append(col_fixed(self._line))
        return self

    def space(self) -> RowBuilder:
        if not self._conf.html:
            self.cells.append(col_fixed(self._space))
        return self

    def finish(self) -> list[Column]:
        if self._conf.start_end_with_separator and not self._conf.html:
            self.cells.append(col_fixed(TermStr(self._conf.separator.rstrip(" "))))
        return self.cells


def write_table(table: Table, out: TextIO, conf: ReportConfig) -> None:
    """Serialize `table` in the format selected by `conf`."""
    if conf.html:
        table.write_html(out)
        return
    if conf.width:
        table.set_fixed_width(conf.width)
    table.write_to(out, "")
