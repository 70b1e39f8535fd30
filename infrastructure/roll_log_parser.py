"""Line-oriented parser for the film roll log format.

The format is one field per line, records separated by blank lines::

    Company ILF
    Ilford

    Stock HP5
    HP5 Plus
    ILF
    400
    5 + 3

    Camera OM1
    Olympus
    OM-1

    Lab LAB
    Local Lab

    2024-03-01 HP5 OM1 LAB 2024-03-20 2024-04-02 12
    Beach trip

The parser is a small state machine: a declaration line selects the record
kind and every following content line fills the next positional field of
that record. Any error aborts the parse.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum, auto
import re

from loguru import logger

from core.errors import (
    DuplicateIdentifier,
    DuplicateScanPage,
    MalformedDate,
    MalformedEntry,
    MalformedIdentifier,
    MalformedNumericField,
    RollLogError,
    UnknownKeyword,
    UnknownReference,
)
from core.models import Camera, Company, Entry, FilmLog, Identifier, IsoRange, Lab, Stock
from infrastructure.utils import looks_like_date, parse_log_date

KEYWORD_COMPANY = "Company"
KEYWORD_STOCK = "Stock"
KEYWORD_CAMERA = "Camera"
KEYWORD_LAB = "Lab"
KEYWORDS = (KEYWORD_COMPANY, KEYWORD_STOCK, KEYWORD_CAMERA, KEYWORD_LAB)

NO_LAB_MARKERS = frozenset({"-", "--", "---"})
COMMENT_PREFIX = "#"

MAX_SCAN_PAGE = 2**32 - 1

_ISO_SPLIT = re.compile(r"[ -]+")
_ROLLS_SPLIT = re.compile(r"[ +]+")


class ParseState(Enum):
    """Which field the next content line fills."""

    NONE = auto()
    COMPANY_NAME = auto()
    STOCK_NAME = auto()
    STOCK_COMPANY = auto()
    STOCK_ISO = auto()
    STOCK_ROLLS = auto()
    CAMERA_BRAND = auto()
    CAMERA_MODEL = auto()
    LAB_NAME = auto()
    ENTRY_NOTE = auto()


_FIRST_STATE = {
    KEYWORD_COMPANY: ParseState.COMPANY_NAME,
    KEYWORD_STOCK: ParseState.STOCK_NAME,
    KEYWORD_CAMERA: ParseState.CAMERA_BRAND,
    KEYWORD_LAB: ParseState.LAB_NAME,
}


def parse_iso(text: str) -> IsoRange:
    """Parse `"400"` or `"100-400"` into an `IsoRange`.

    Raises:
        MalformedNumericField: on more than two values, non-integers, a zero
            low value, or a descending range.
    """
    parts = [p for p in _ISO_SPLIT.split(text.strip()) if p]
    if not parts or len(parts) > 2:
        raise MalformedNumericField("invalid ISO")
    values: list[int] = []
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise MalformedNumericField("invalid integers in ISO")
        values.append(int(part))
    low = values[0]
    high = values[1] if len(values) > 1 else 0
    if high == 0:
        high = low
    if low == 0:
        raise MalformedNumericField("ISO must be greater than zero")
    if high < low:
        raise MalformedNumericField("invalid ISO range")
    return IsoRange(low, high)


def parse_rolls(text: str) -> int:
    """Sum a roll count written as `"10"` or `"5 + 3 + 2"`."""
    total = 0
    for part in _ROLLS_SPLIT.split(text.strip()):
        if not part:
            continue
        try:
            total += int(part)
        except ValueError as ex:
            raise MalformedNumericField(f"invalid number {part}") from ex
    return total


def parse_scan_page(text: str) -> int:
    """Parse an unsigned 32-bit scan page number."""
    if not (text.isascii() and text.isdigit()) or int(text) > MAX_SCAN_PAGE:
        raise MalformedNumericField(f"invalid scan page {text}")
    return int(text)


def _parse_date(token: str, what: str) -> datetime:
    try:
        return parse_log_date(token)
    except ValueError as ex:
        raise MalformedDate(f"error in {what}: '{token}'") from ex


def is_declaration(tokens: list[str]) -> bool:
    """True for an entry line or a `<Keyword> <id>` line with a valid id.

    Free text that merely starts with a keyword, such as `Camera jammed`,
    is not a declaration.
    """
    if not tokens:
        return False
    if looks_like_date(tokens[0]):
        return True
    if len(tokens) != 2 or tokens[0] not in KEYWORDS:
        return False
    try:
        Identifier.parse(tokens[1])
    except MalformedIdentifier:
        return False
    return True


class RollLogParser:
    """Single-use parser turning roll log lines into a `FilmLog`."""

    def __init__(self) -> None:
        self.log = FilmLog()
        self.state = ParseState.NONE
        self._target: Company | Stock | Camera | Lab | Entry | None = None
        self._scans: set[int] = set()

    def parse(self, lines: Iterable[str]) -> FilmLog:
        """Consume all `lines` and return the dataset.

        Raises:
            RollLogError: at the first structural or referential error. The
                exception carries the source line and the partial dataset.
        """
        line_nr = 0
        for line_nr, raw in enumerate(lines, 1):
            text = raw.strip()
            try:
                self.feed(text, line_nr)
            except RollLogError as ex:
                ex.at(line_nr, text, self.log)
                raise

        logger.debug("Parsed {} lines: {}", line_nr, self.log.counts)
        return self.log

    def feed(self, text: str, line_nr: int) -> None:
        """Process one stripped line."""
        if not text:
            self.state = ParseState.NONE
            self._target = None
            return
        if text.startswith(COMMENT_PREFIX):
            return

        if self.state is ParseState.ENTRY_NOTE:
            if not is_declaration(text.split()):
                self._target.note = text
                self.state = ParseState.NONE
                return
            self.state = ParseState.NONE

        if self.state is not ParseState.NONE:
            self._fill_field(text)
            return

        tokens = text.split()
        if looks_like_date(tokens[0]):
            self._add_entry(tokens, line_nr)
            return
        self._declare(tokens)

    def _fill_field(self, text: str) -> None:
        target = self._target
        state = self.state
        next_state = ParseState.NONE

        if state is ParseState.COMPANY_NAME:
            target.name = text
        elif state is ParseState.STOCK_NAME:
            target.name = text
            next_state = ParseState.STOCK_COMPANY
        elif state is ParseState.STOCK_COMPANY:
            company_id = Identifier.parse(text)
            if company_id not in self.log.companies:
                raise UnknownReference(f"no company by id {company_id}")
            target.company_id = company_id
            next_state = ParseState.STOCK_ISO
        elif state is ParseState.STOCK_ISO:
            target.iso = parse_iso(text)
            next_state = ParseState.STOCK_ROLLS
        elif state is ParseState.STOCK_ROLLS:
            target.rolls = parse_rolls(text)
        elif state is ParseState.CAMERA_BRAND:
            target.brand = text
            next_state = ParseState.CAMERA_MODEL
        elif state is ParseState.CAMERA_MODEL:
            target.model = text
        elif state is ParseState.LAB_NAME:
            target.name = text

        self.state = next_state

    def _declare(self, tokens: list[str]) -> None:
        if len(tokens) != 2:
            raise MalformedEntry("invalid line")

        keyword, token = tokens
        if keyword not in KEYWORDS:
            raise UnknownKeyword(f"invalid keyword: '{keyword}'")

        record_id = Identifier.parse(token)
        catalog, record = {
            KEYWORD_COMPANY: (self.log.companies, Company),
            KEYWORD_STOCK: (self.log.stocks, Stock),
            KEYWORD_CAMERA: (self.log.cameras, Camera),
            KEYWORD_LAB: (self.log.labs, Lab),
        }[keyword]
        if record_id in catalog:
            raise DuplicateIdentifier(f"duplicate {keyword.lower()} id {record_id}")

        self._target = catalog[record_id] = record(record_id)
        self.state = _FIRST_STATE[keyword]
        logger.debug("{} {} declared", keyword, record_id)

    def _add_entry(self, tokens: list[str], line_nr: int) -> None:
        if len(tokens) < 3:
            raise MalformedEntry("invalid entry")

        entry = Entry(
            load_date=_parse_date(tokens[0], "load date"),
            stock_id=self._lookup(tokens[1], self.log.stocks, KEYWORD_STOCK),
            camera_id=self._lookup(tokens[2], self.log.cameras, KEYWORD_CAMERA),
            line=line_nr,
        )

        lab = tokens[3] if len(tokens) > 3 else None
        if lab is not None and lab not in NO_LAB_MARKERS:
            entry.lab_id = self._lookup(lab, self.log.labs, KEYWORD_LAB)
            if len(tokens) < 5 or tokens[4] in NO_LAB_MARKERS:
                raise MalformedEntry("entry should contain lab-in-date when lab is specified")

        if len(tokens) > 4 and tokens[4] not in NO_LAB_MARKERS:
            entry.lab_in_date = _parse_date(tokens[4], "lab-in-date")
        if len(tokens) > 5 and tokens[5] not in NO_LAB_MARKERS:
            entry.lab_out_date = _parse_date(tokens[5], "lab-out-date")
        if len(tokens) > 6:
            scan = parse_scan_page(tokens[6])
            if scan:
                if scan in self._scans:
                    raise DuplicateScanPage(f"duplicate scan page: {scan}")
                self._scans.add(scan)
                entry.scan = scan

        self.log.entries.append(entry)
        self._target = entry
        self.state = ParseState.ENTRY_NOTE

    @staticmethod
    def _lookup(token: str, catalog: dict, kind: str) -> Identifier:
        record_id = Identifier.parse(token)
        if record_id not in catalog:
            raise UnknownReference(f"no {kind.lower()} with id {record_id}")
        return record_id


def parse_roll_log(lines: Iterable[str]) -> FilmLog:
    """Parse an iterable of lines (e.g. an open text file) into a `FilmLog`."""
    return RollLogParser().parse(lines)
