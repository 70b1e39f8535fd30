"""
Unit tests for core/models.py

Identifier parsing and equality, ISO range display, catalog lookups and the
"no lab" sentinel.
"""
from datetime import datetime, timezone

import pytest

from core.errors import MalformedIdentifier
from core.models import (
    NO_LAB,
    Camera,
    Entry,
    FilmLog,
    Identifier,
    IsoRange,
    Lab,
    Stock,
)


# ── Identifier ────────────────────────────────────────────────────────────────

def test_identifier_parse_three_chars():
    ident = Identifier.parse("HP5")
    assert ident.raw == b"HP5"
    assert str(ident) == "[HP5]"
    assert ident.text == "HP5"


@pytest.mark.parametrize("token", ["", "A", "AB", "ABCD", "HP5+"])
def test_identifier_wrong_length_fails(token):
    with pytest.raises(MalformedIdentifier):
        Identifier.parse(token)


def test_identifier_length_is_in_bytes():
    # "é" is two bytes in UTF-8
    assert Identifier.parse("éA").raw == "éA".encode("utf-8")
    with pytest.raises(MalformedIdentifier):
        Identifier.parse("éAB")


def test_identifier_zero_is_reserved():
    with pytest.raises(MalformedIdentifier):
        Identifier.parse("\0\0\0")
    assert Identifier.ZERO.is_zero


def test_identifier_equality_is_bytewise():
    assert Identifier.parse("abc") == Identifier.parse("abc")
    assert Identifier.parse("abc") != Identifier.parse("ABC")
    assert len({Identifier.parse("abc"), Identifier(b"abc")}) == 1


# ── IsoRange ──────────────────────────────────────────────────────────────────

def test_iso_single_value():
    assert str(IsoRange(400, 400)) == "400"


def test_iso_range():
    assert str(IsoRange(100, 400)) == "100-400"


# ── Lab / FilmLog ─────────────────────────────────────────────────────────────

def test_no_lab_sentinel():
    assert NO_LAB.is_none
    assert str(NO_LAB) == "[N/A]"
    assert not Lab(Identifier.parse("LAB"), "Local").is_none


def test_lab_of_returns_sentinel_without_lab():
    log = FilmLog()
    stock_id, camera_id = Identifier.parse("HP5"), Identifier.parse("OM1")
    log.stocks[stock_id] = Stock(stock_id)
    log.cameras[camera_id] = Camera(camera_id, "Olympus", "OM-1")
    entry = Entry(datetime(2024, 1, 1, tzinfo=timezone.utc), stock_id, camera_id)

    assert not entry.has_lab
    assert log.lab_of(entry) is NO_LAB
    assert log.camera_of(entry).brand == "Olympus"


def test_company_of_incomplete_stock_is_nameless():
    log = FilmLog()
    stock = Stock(Identifier.parse("HP5"))
    assert log.company_of(stock).name == ""


def test_counts(sample_log):
    assert sample_log.counts == {
        "companies": 2,
        "stocks": 2,
        "cameras": 2,
        "labs": 1,
        "entries": 4,
    }
