"""Core domain models for the film roll log: identifiers, catalog records and entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from core.errors import MalformedIdentifier

ID_LENGTH = 3
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Identifier:
    """A 3-byte opaque key naming a company, stock, camera or lab."""

    raw: bytes

    ZERO: ClassVar[Identifier]

    @classmethod
    def parse(cls, text: str) -> Identifier:
        """Build an identifier from a source token.

        Raises:
            MalformedIdentifier: when the UTF-8 encoded token is not exactly
                3 bytes, or is the reserved all-zero value.
        """
        raw = text.encode("utf-8")
        if len(raw) != ID_LENGTH or raw == bytes(ID_LENGTH):
            raise MalformedIdentifier(f"invalid id: '{text}'")
        return cls(raw)

    @property
    def is_zero(self) -> bool:
        return self.raw == bytes(ID_LENGTH)

    @property
    def text(self) -> str:
        return self.raw.decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return f"[{self.text}]"


Identifier.ZERO = Identifier(bytes(ID_LENGTH))


@dataclass(frozen=True)
class IsoRange:
    """Film sensitivity; `low == high` means a single box speed."""

    low: int
    high: int

    def __str__(self) -> str:
        if self.low == self.high:
            return str(self.low)
        return f"{self.low}-{self.high}"


@dataclass
class Company:
    id: Identifier
    name: str = ""


@dataclass
class Stock:
    """A film stock with its owning company and the number of rolls bought."""

    id: Identifier
    company_id: Identifier = Identifier.ZERO
    name: str = ""
    iso: IsoRange = IsoRange(0, 0)
    rolls: int = 0


@dataclass
class Camera:
    id: Identifier
    brand: str = ""
    model: str = ""


@dataclass
class Lab:
    id: Identifier
    name: str = ""

    @property
    def is_none(self) -> bool:
        """True for the "no lab" sentinel."""
        return self.id.is_zero

    def __str__(self) -> str:
        if self.is_none:
            return "[N/A]"
        return f"{self.id} {self.name}"


NO_LAB = Lab(Identifier.ZERO, "")


@dataclass
class Entry:
    """One roll: loaded into a camera, optionally sent to a lab and scanned.

    References to the stock, camera and lab are identifiers resolved through
    `FilmLog`. `lab_id` is `Identifier.ZERO` while the roll has no lab.
    """

    load_date: datetime
    stock_id: Identifier
    camera_id: Identifier
    lab_id: Identifier = Identifier.ZERO
    lab_in_date: datetime | None = None
    lab_out_date: datetime | None = None
    scan: int = 0
    line: int = 0
    note: str = ""

    @property
    def has_lab(self) -> bool:
        return not self.lab_id.is_zero


@dataclass
class FilmLog:
    """The parsed dataset: catalog maps keyed by identifier plus ordered entries.

    Built once by the parser; renderers only read from it.
    """

    companies: dict[Identifier, Company] = field(default_factory=dict)
    stocks: dict[Identifier, Stock] = field(default_factory=dict)
    cameras: dict[Identifier, Camera] = field(default_factory=dict)
    labs: dict[Identifier, Lab] = field(default_factory=dict)
    entries: list[Entry] = field(default_factory=list)

    def company_of(self, stock: Stock) -> Company:
        """Return the stock's company; a nameless one if the stock was left incomplete."""
        company = self.companies.get(stock.company_id)
        if company is None:
            return Company(Identifier.ZERO)
        return company

    def stock_of(self, entry: Entry) -> Stock:
        return self.stocks[entry.stock_id]

    def camera_of(self, entry: Entry) -> Camera:
        return self.cameras[entry.camera_id]

    def lab_of(self, entry: Entry) -> Lab:
        """Return the entry's lab, or `NO_LAB` when none was assigned."""
        if not entry.has_lab:
            return NO_LAB
        return self.labs[entry.lab_id]

    @property
    def counts(self) -> dict[str, int]:
        """Structural sizes, used for diagnostics."""
        return {
            "companies": len(self.companies),
            "stocks": len(self.stocks),
            "cameras": len(self.cameras),
            "labs": len(self.labs),
            "entries": len(self.entries),
        }
