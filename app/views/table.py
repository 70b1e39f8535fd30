"""Column table layout engine.

Collects an optional header and ragged rows of `Column` cells, computes one
width per column index, optionally stretches the non-fixed columns up to a
target total width, and writes aligned text. Nothing is ever truncated: the
target width is a minimum.
"""

from __future__ import annotations

import html
import io
from typing import TextIO

from app.views.columns import Align, Column


class Table:
    """A header plus rows of columns, rendered with shared column widths."""

    def __init__(self, width: int = 0) -> None:
        self._width = width
        self._head: list[Column] = []
        self._rows: list[list[Column]] = []

    def set_fixed_width(self, width: int) -> None:
        """Set the target total width; 0 disables stretching."""
        self._width = width

    def new_row(self) -> None:
        self._rows.append([])

    def add_row(self, *cols: Column) -> None:
        self.new_row()
        for col in cols:
            self.add_col(col)

    def add_col(self, col: Column) -> None:
        """Append `col` to the last row."""
        if not self._rows:
            raise RuntimeError("can't add col without a row")
        self._rows[-1].append(col)

    def add_head_col(self, col: Column) -> None:
        self._head.append(col)

    def set_header(self, cols: list[Column]) -> None:
        self._head = list(cols)

    @property
    def rows(self) -> list[list[Column]]:
        return self._rows

    def column_widths(self) -> list[int]:
        """Final width of every column index after stretching."""
        widest = max([len(self._head)] + [len(row) for row in self._rows])
        fixed = [False] * widest
        widths = [0] * widest

        for row in [self._head, *self._rows]:
            for i, col in enumerate(row):
                fixed[i] = fixed[i] or col.fixed()
                widths[i] = max(widths[i], col.width())

        total = sum(widths)
        flexible = [i for i in range(widest) if not fixed[i]]
        if not self._width or total >= self._width or not flexible:
            return widths

        surplus = self._width - total
        per = surplus // len(flexible)
        rem = surplus - per * len(flexible)
        for i in flexible:
            widths[i] += per + rem
            rem = 0
        return widths

    def write_to(self, out: TextIO, sep: str) -> None:
        """Write the header (if any) and every row, one line each."""
        widths = self.column_widths()
        if self._head:
            out.write(self._format_row(self._head, widths, sep, header=True))
        for row in self._rows:
            out.write(self._format_row(row, widths, sep))

    def render(self, sep: str = "") -> str:
        buf = io.StringIO()
        self.write_to(buf, sep)
        return buf.getvalue()

    def write_html(self, out: TextIO) -> None:
        """Write the header and rows as an HTML table; decoration is dropped."""
        out.write("<table>\n")
        if self._head:
            cells = "".join(f"<th>{html.escape(col.text())}</th>" for col in self._head)
            out.write(f"<thead><tr>{cells}</tr></thead>\n")
        out.write("<tbody>\n")
        for row in self._rows:
            cells = "".join(self._html_cell(col) for col in row)
            out.write(f"<tr>{cells}</tr>\n")
        out.write("</tbody>\n</table>\n")

    @staticmethod
    def _html_cell(col: Column) -> str:
        style = ' style="text-align:right"' if col.align() is Align.RIGHT else ""
        return f"<td{style}>{html.escape(col.text())}</td>"

    @staticmethod
    def _format_row(row: list[Column], widths: list[int], sep: str, header: bool = False) -> str:
        cells = []
        for i, col in enumerate(row):
            pad = " " * max(widths[i] - col.width(), 0)
            text = col.text()
            if col.align() is Align.RIGHT and not header:
                text = pad + text
            else:
                text = text + pad
            cells.append(col.prefix() + text + col.suffix())
        return sep.join(cells) + "\n"
