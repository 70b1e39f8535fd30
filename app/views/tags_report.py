"""The "tags" report: one line of `key:value` tags per entry, for photo tagging tools."""

from __future__ import annotations

from typing import TextIO

from core.models import FilmLog
from core.services.roll_service import RollRow, iter_rows


def clean_tag(value: str) -> str:
    """Lower-case `value` and replace spaces with underscores."""
    return value.replace(" ", "_").lower()


def entry_tags(log: FilmLog, row: RollRow) -> list[str]:
    entry = row.entry
    camera = log.camera_of(entry)
    stock = log.stock_of(entry)
    lab = log.lab_of(entry)

    tags = [
        f"id:{row.short_id}",
        f"camera:{clean_tag(camera.brand)}-{clean_tag(camera.model)}",
        f"film:{clean_tag(log.company_of(stock).name)}-{clean_tag(stock.name)}",
        f"iso:{clean_tag(str(stock.iso))}",
    ]
    if not lab.is_none:
        tags.append(f"lab:{clean_tag(lab.name)}")
    if entry.scan:
        tags.append(f"scan:{entry.scan:04d}")
    tags.append(f"line:{entry.line}")
    return tags


def render_tags(log: FilmLog, out: TextIO, id_filter: str = "") -> None:
    """Write one space-separated tag line per (optionally filtered) entry."""
    for row in iter_rows(log, id_filter):
        out.write(" ".join(entry_tags(log, row)) + "\n")
