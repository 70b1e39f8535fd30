"""Per-pass derivations over a `FilmLog`: report rows, loaded cameras, stock counts.

Everything here is computed fresh for each rendering pass and never mutates
the dataset.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from core.models import Camera, Entry, FilmLog, Identifier, Stock
from core.services.short_id_service import ShortIdService


@dataclass
class RollRow:
    """An entry paired with its pass-scoped short-ID and loaded flag."""

    entry: Entry
    short_id: str
    loaded: bool


@dataclass
class StockSummary:
    """Roll counts for one stock and the camera currently holding it."""

    stock: Stock
    shot: int = 0
    camera: Camera | None = None

    @property
    def total(self) -> int:
        return self.stock.rolls

    @property
    def available(self) -> int:
        return self.stock.rolls - self.shot


def loaded_entry_indices(entries: list[Entry]) -> dict[Identifier, int]:
    """Map each camera to the index of its last entry that has no lab yet.

    That entry is the roll currently loaded in the camera.
    """
    loaded: dict[Identifier, int] = {}
    for i, entry in enumerate(entries):
        if not entry.has_lab:
            loaded[entry.camera_id] = i
    return loaded


def iter_rows(log: FilmLog, id_filter: str = "") -> Iterator[RollRow]:
    """Yield a `RollRow` per entry, in source order.

    Short-IDs are assigned over every entry so that filtering by `id_filter`
    does not change the IDs of the rows that remain.
    """
    loaded = loaded_entry_indices(log.entries)
    ids = ShortIdService()
    for i, entry in enumerate(log.entries):
        short_id = ids.assign(entry)
        if id_filter and short_id != id_filter:
            continue
        yield RollRow(entry, short_id, loaded.get(entry.camera_id) == i)


def stock_summary(log: FilmLog) -> list[StockSummary]:
    """Summarize every stock, sorted by stock name then id."""
    summaries = {stock_id: StockSummary(stock) for stock_id, stock in log.stocks.items()}
    for row in iter_rows(log):
        summary = summaries[row.entry.stock_id]
        summary.shot += 1
        if row.loaded:
            summary.camera = log.camera_of(row.entry)
    return sorted(summaries.values(), key=lambda s: (s.stock.name, s.stock.id.raw))
