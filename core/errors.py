"""Errors raised while reading a film roll log.

Every error is fatal for the parse. The parser attaches the 1-based source
line, the offending (stripped) text and the partially built dataset before
raising, so callers can report a precise location.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.models import FilmLog


class RollLogError(ValueError):
    """Base class for all roll log parse failures."""

    def __init__(self, message: str, line: int = 0, text: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.text = text
        self.partial: FilmLog | None = None

    def at(self, line: int, text: str, partial: FilmLog | None = None) -> RollLogError:
        """Attach location details and return self for re-raising."""
        self.line = line
        self.text = text
        self.partial = partial
        return self

    def __str__(self) -> str:
        if not self.line:
            return self.message
        return f"line {self.line}: {self.message}: '{self.text}'"


class MalformedIdentifier(RollLogError):
    """An identifier token that is not exactly 3 bytes."""


class DuplicateIdentifier(RollLogError):
    """The same kind and identifier declared twice."""


class UnknownReference(RollLogError):
    """A stock, camera, lab or company referenced before its declaration."""


class MalformedDate(RollLogError):
    """A date token that is not a valid `YYYY-MM-DD` calendar date."""


class MalformedNumericField(RollLogError):
    """A bad ISO range, roll count or scan page."""


class DuplicateScanPage(RollLogError):
    """A non-zero scan page used by more than one entry."""


class MalformedEntry(RollLogError):
    """An entry line with too few or too many tokens, or a missing lab-in date."""


class UnknownKeyword(RollLogError):
    """A declaration line whose keyword is not Company, Stock, Camera or Lab."""


class InputReadError(RollLogError):
    """The input stream could not be read or decoded."""
