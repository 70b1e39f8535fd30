"""Table cell types and decorators.

A column is anything with a display width, an alignment, a decoration
prefix/suffix (never counted in the width) and a "fixed" flag that exempts
it from width stretching. `Str` measures code points, `TermStr` measures
terminal cells and ignores ANSI escape sequences. Wrappers override exactly
one property of an inner column and delegate the rest.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Protocol
import unicodedata

ANSI_RESET = "\033[0m"
_ANSI_ESCAPE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")


class Align(Enum):
    LEFT = "left"
    RIGHT = "right"


class Column(Protocol):
    """Capability set the table layout engine relies on."""

    def width(self) -> int:
        """Displayed width of `text()`."""
        ...

    def align(self) -> Align:
        """Placement of `text()` inside a wider cell."""
        ...

    def prefix(self) -> str:
        """Decoration written before the padded text."""
        ...

    def text(self) -> str:
        """Cell content."""
        ...

    def suffix(self) -> str:
        """Decoration written after the padded text."""
        ...

    def fixed(self) -> bool:
        """True if the column is never stretched."""
        ...


def terminal_width_of(text: str) -> int:
    """Number of terminal cells `text` occupies.

    Escape sequences and combining marks take no space, East Asian wide and
    fullwidth characters take two cells.
    """
    w = 0
    for ch in _ANSI_ESCAPE.sub("", text):
        if unicodedata.combining(ch) or unicodedata.category(ch) in ("Cc", "Cf"):
            continue
        w += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return w


@dataclass(frozen=True)
class Str:
    """Plain text measured in code points."""

    value: str

    def width(self) -> int:
        return len(self.value)

    def align(self) -> Align:
        return Align.LEFT

    def prefix(self) -> str:
        return ""

    def text(self) -> str:
        return self.value

    def suffix(self) -> str:
        return ""

    def fixed(self) -> bool:
        return False


@dataclass(frozen=True)
class TermStr(Str):
    """Terminal text measured in display cells."""

    def width(self) -> int:
        return terminal_width_of(self.value)


class _Wrapped:
    """Delegates every property to `inner`; subclasses override one."""

    def __init__(self, inner: Column) -> None:
        self.inner = inner

    def width(self) -> int:
        return self.inner.width()

    def align(self) -> Align:
        return self.inner.align()

    def prefix(self) -> str:
        return self.inner.prefix()

    def text(self) -> str:
        return self.inner.text()

    def suffix(self) -> str:
        return self.inner.suffix()

    def fixed(self) -> bool:
        return self.inner.fixed()


class _Fixed(_Wrapped):
    def fixed(self) -> bool:
        return True


class _Aligned(_Wrapped):
    def __init__(self, inner: Column, align: Align) -> None:
        super().__init__(inner)
        self._align = align

    def align(self) -> Align:
        return self._align


class _Prefixed(_Wrapped):
    def __init__(self, inner: Column, prefix: str) -> None:
        super().__init__(inner)
        self._prefix = prefix

    def prefix(self) -> str:
        return self._prefix


class _Suffixed(_Wrapped):
    def __init__(self, inner: Column, suffix: str) -> None:
        super().__init__(inner)
        self._suffix = suffix

    def suffix(self) -> str:
        return self._suffix


def col_fixed(col: Column) -> Column:
    return _Fixed(col)


def col_align_left(col: Column) -> Column:
    return _Aligned(col, Align.LEFT)


def col_align_right(col: Column) -> Column:
    return _Aligned(col, Align.RIGHT)


def col_prefixed(col: Column, prefix: str) -> Column:
    return _Prefixed(col, prefix)


def col_suffixed(col: Column, suffix: str) -> Column:
    return _Suffixed(col, suffix)


def col_pre_suf(col: Column, prefix: str, suffix: str) -> Column:
    """Decorate `col` with both a prefix and a suffix."""
    return col_prefixed(col_suffixed(col, suffix), prefix)


def clr_term_str(color: str, text: str) -> Column:
    """Terminal text wrapped in `color` and a reset; undecorated if `color` is empty."""
    ts = TermStr(text)
    if not color:
        return ts
    return col_pre_suf(ts, color, ANSI_RESET)


def term_strs(*values: str) -> list[Column]:
    return [TermStr(v) for v in values]


def strs(*values: str) -> list[Column]:
    return [Str(v) for v in values]
