"""
Unit tests for infrastructure/roll_log_parser.py

Covers record filling, entry lines, notes, comments and every fatal error
kind with its line number.
"""
from datetime import datetime, timezone
import textwrap

import pytest

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
from core.models import Identifier, IsoRange
from infrastructure.roll_log_parser import (
    ParseState,
    RollLogParser,
    parse_iso,
    parse_rolls,
    parse_roll_log,
)

CATALOG = """\
Company ILF
Ilford

Stock HP5
HP5 Plus
ILF
400
10

Camera OM1
Olympus
OM-1

Lab LAB
Local Lab
"""


def _parse(body):
    return parse_roll_log((CATALOG + "\n" + textwrap.dedent(body)).splitlines())


def _catalog_lines():
    return len(CATALOG.splitlines()) + 1


# ── field parsers ─────────────────────────────────────────────────────────────

def test_parse_iso_single():
    assert parse_iso("400") == IsoRange(400, 400)


def test_parse_iso_range():
    assert parse_iso("100-400") == IsoRange(100, 400)


def test_parse_iso_space_separated_range():
    assert parse_iso("100 400") == IsoRange(100, 400)


@pytest.mark.parametrize("text", ["400-100", "100 200 300", "abc", "0", "-"])
def test_parse_iso_rejects(text):
    with pytest.raises(MalformedNumericField):
        parse_iso(text)


def test_parse_rolls_sum():
    assert parse_rolls("5 + 3 + 2") == 10
    assert parse_rolls("5+3") == 8
    assert parse_rolls("7") == 7


def test_parse_rolls_rejects_text():
    with pytest.raises(MalformedNumericField):
        parse_rolls("5 + many")


# ── catalog records ───────────────────────────────────────────────────────────

def test_catalog_records(sample_log):
    ilf = sample_log.companies[Identifier.parse("ILF")]
    assert ilf.name == "Ilford"

    hp5 = sample_log.stocks[Identifier.parse("HP5")]
    assert hp5.name == "HP5 Plus"
    assert hp5.company_id == ilf.id
    assert hp5.iso == IsoRange(400, 400)
    assert hp5.rolls == 8

    ptr = sample_log.stocks[Identifier.parse("PTR")]
    assert ptr.iso == IsoRange(160, 400)

    om1 = sample_log.cameras[Identifier.parse("OM1")]
    assert (om1.brand, om1.model) == ("Olympus", "OM-1")

    assert sample_log.labs[Identifier.parse("LAB")].name == "Local Lab"


def test_entries_in_source_order(sample_log):
    assert [e.line for e in sample_log.entries] == [31, 34, 37, 39]


def test_full_entry_fields(sample_log):
    entry = sample_log.entries[0]
    assert entry.load_date == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert entry.stock_id == Identifier.parse("HP5")
    assert entry.camera_id == Identifier.parse("OM1")
    assert entry.lab_id == Identifier.parse("LAB")
    assert entry.lab_in_date == datetime(2024, 1, 20, tzinfo=timezone.utc)
    assert entry.lab_out_date == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert entry.scan == 12
    assert entry.note == "Beach trip"


def test_no_lab_marker_and_missing_lab(sample_log):
    marked, bare = sample_log.entries[1], sample_log.entries[2]
    assert not marked.has_lab
    assert marked.note == "Portraits"
    assert not bare.has_lab
    assert bare.note == ""


@pytest.mark.parametrize("marker", ["-", "--", "---"])
def test_all_no_lab_markers(marker):
    log = _parse(f"2024-01-01 HP5 OM1 {marker}\n")
    assert not log.entries[0].has_lab


def test_comments_are_ignored_inside_records():
    log = parse_roll_log(
        ["Camera OM1", "# brand next", "Olympus", "# model next", "OM-1"]
    )
    camera = log.cameras[Identifier.parse("OM1")]
    assert (camera.brand, camera.model) == ("Olympus", "OM-1")


def test_surrounding_whitespace_is_trimmed():
    log = parse_roll_log(["  Company ILF  ", "\tIlford  "])
    assert log.companies[Identifier.parse("ILF")].name == "Ilford"


def test_blank_line_leaves_record_partial():
    log = parse_roll_log(["Camera OM1", "Olympus", "", "Company ILF", "Ilford"])
    camera = log.cameras[Identifier.parse("OM1")]
    assert camera.brand == "Olympus"
    assert camera.model == ""


def test_note_line_that_is_a_declaration_starts_new_entry():
    log = _parse(
        """\
        2024-01-01 HP5 OM1
        2024-01-02 HP5 OM1
        second roll
        """
    )
    assert len(log.entries) == 2
    assert log.entries[0].note == ""
    assert log.entries[1].note == "second roll"


def test_note_starting_with_a_keyword_is_kept_as_note():
    log = _parse(
        """\
        2024-01-01 HP5 OM1
        Camera jammed
        """
    )
    assert log.entries[0].note == "Camera jammed"
    assert len(log.cameras) == 1


@pytest.mark.parametrize("note", ["Lab closed for the week", "Stock up", "Company trip"])
def test_keyword_notes_that_are_not_declarations(note):
    log = _parse(f"2024-01-01 HP5 OM1\n{note}\n")
    assert log.entries[0].note == note


def test_note_shaped_like_a_declaration_declares_a_record():
    log = _parse(
        """\
        2024-01-01 HP5 OM1
        Lab DEV
        Darkroom
        """
    )
    assert log.entries[0].note == ""
    assert log.labs[Identifier.parse("DEV")].name == "Darkroom"


def test_note_is_single_line():
    with pytest.raises(UnknownKeyword):
        _parse(
            """\
            2024-01-01 HP5 OM1
            first line of note
            second line
            """
        )


def test_lab_dates_accept_unset_marker_before_scan():
    log = _parse("2024-01-01 HP5 OM1 LAB 2024-01-10 - 7\n")
    entry = log.entries[0]
    assert entry.lab_out_date is None
    assert entry.scan == 7


def test_scan_page_zero_may_repeat():
    log = _parse(
        """\
        2024-01-01 HP5 OM1 LAB 2024-01-10 2024-01-20 0

        2024-01-02 HP5 OM1 LAB 2024-01-10 2024-01-20 0
        """
    )
    assert [e.scan for e in log.entries] == [0, 0]


def test_parser_state_after_entry():
    parser = RollLogParser()
    parser.parse(CATALOG.splitlines() + ["", "2024-01-01 HP5 OM1"])
    assert parser.state is ParseState.ENTRY_NOTE


# ── errors ────────────────────────────────────────────────────────────────────

def test_duplicate_stock_id():
    with pytest.raises(DuplicateIdentifier) as exc:
        parse_roll_log(["Company ILF", "Ilford", "", "Stock HP5", "", "Stock HP5"])
    assert exc.value.line == 6
    assert "line 6" in str(exc.value)


def test_unknown_camera_reference():
    with pytest.raises(UnknownReference) as exc:
        _parse("2024-01-01 HP5 XXX\n")
    assert exc.value.line == _catalog_lines() + 1
    assert exc.value.text == "2024-01-01 HP5 XXX"


def test_unknown_stock_reference():
    with pytest.raises(UnknownReference):
        _parse("2024-01-01 XXX OM1\n")


def test_unknown_lab_reference():
    with pytest.raises(UnknownReference):
        _parse("2024-01-01 HP5 OM1 XXX 2024-01-02\n")


def test_unknown_company_in_stock():
    with pytest.raises(UnknownReference) as exc:
        parse_roll_log(["Stock HP5", "HP5 Plus", "ILF"])
    assert exc.value.line == 3


def test_duplicate_scan_page():
    with pytest.raises(DuplicateScanPage) as exc:
        _parse(
            """\
            2024-01-01 HP5 OM1 LAB 2024-01-10 2024-01-20 12

            2024-01-02 HP5 OM1 LAB 2024-01-10 2024-01-20 12
            """
        )
    assert exc.value.line == _catalog_lines() + 3


def test_lab_requires_lab_in_date():
    with pytest.raises(MalformedEntry):
        _parse("2024-01-01 HP5 OM1 LAB\n")


def test_entry_with_too_few_tokens():
    with pytest.raises(MalformedEntry):
        _parse("2024-01-01 HP5\n")


def test_entry_ignores_trailing_tokens():
    log = _parse("2024-01-01 HP5 OM1 LAB 2024-01-10 2024-01-20 12 extra tokens\n")
    assert len(log.entries) == 1
    assert log.entries[0].scan == 12


def test_invalid_calendar_date():
    with pytest.raises(MalformedDate):
        _parse("2024-02-30 HP5 OM1\n")


def test_invalid_lab_in_date():
    with pytest.raises(MalformedDate):
        _parse("2024-01-01 HP5 OM1 LAB 01/10/2024\n")


def test_invalid_scan_page():
    with pytest.raises(MalformedNumericField):
        _parse("2024-01-01 HP5 OM1 LAB 2024-01-10 2024-01-20 twelve\n")


def test_unknown_keyword():
    with pytest.raises(UnknownKeyword):
        parse_roll_log(["Film HP5"])


def test_wrong_token_count():
    with pytest.raises(MalformedEntry):
        parse_roll_log(["Stock HP5 extra"])


def test_malformed_identifier_in_declaration():
    with pytest.raises(MalformedIdentifier) as exc:
        parse_roll_log(["# header", "Camera OM10"])
    assert exc.value.line == 2


def test_bad_iso_line():
    with pytest.raises(MalformedNumericField) as exc:
        parse_roll_log(["Company ILF", "Ilford", "", "Stock HP5", "HP5", "ILF", "400-100"])
    assert exc.value.line == 7


def test_error_carries_partial_dataset():
    with pytest.raises(RollLogError) as exc:
        _parse("2024-01-01 HP5 OM1\n\n2024-01-02 HP5 XXX\n")
    assert exc.value.partial is not None
    assert len(exc.value.partial.entries) == 1
