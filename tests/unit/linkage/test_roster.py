"""Tests for roster parsing and matching."""

from __future__ import annotations

import pytest

from reconcile.core.models import FieldMap, Table
from reconcile.linkage import RosterEntry, match_roster, parse_roster, parse_roster_line


class TestParseRosterLine:
    def test_numbering_honorific_and_phone(self):
        entry = parse_roster_line("12.Pastor Ada Obi:0803 123 4567")

        assert entry == RosterEntry(name="Ada Obi", first_name="Ada", last_name="Obi", phone="08031234567")

    def test_honorific_with_period(self):
        entry = parse_roster_line("3. Mrs. Grace Bello")

        assert entry.name == "Grace Bello"
        assert entry.phone == ""

    def test_phone_without_colon(self):
        entry = parse_roster_line("Tunde Bakare 08031234567")

        assert entry.name == "Tunde Bakare"
        assert entry.phone == "08031234567"

    def test_multi_part_last_name(self):
        entry = parse_roster_line("Chidi Isaac Okafor")

        assert entry.first_name == "Chidi"
        assert entry.last_name == "Isaac Okafor"

    def test_single_name(self):
        entry = parse_roster_line("Dr Ngozi")

        assert entry.first_name == "Ngozi"
        assert entry.last_name == ""

    @pytest.mark.parametrize("line", ["", "   ", "12.", "  7.  "])
    def test_lines_without_a_name(self, line):
        assert parse_roster_line(line) is None


class TestParseRoster:
    def test_repeated_people_are_dropped(self):
        text = "1.Ada Obi\n\n2. ada  obi:0803 123 4567\n3.Grace Bello\n"

        entries = parse_roster(text)

        assert [e.name for e in entries] == ["Ada Obi", "Grace Bello"]
        assert entries[0].phone == ""


class TestMatchRoster:
    def test_found_and_missing(self, checkin_table, input_fields):
        entries = parse_roster("1.Ann Lee\n2.Chidi Isaac\n3.Nobody Here\n")

        matches = match_roster(entries, checkin_table, input_fields)

        assert [m.found for m in matches] == [True, True, False]
        assert matches[0].tier == "exact"
        assert matches[1].tier == "reordered_tokens"
        assert matches[1].record["camper_lastName"] == "Chidi"
        assert matches[2].record is None

    def test_reversed_table_names(self, checkin_table, input_fields):
        """'Doe John' in the table is found when the roster says 'John Doe'."""
        matches = match_roster(parse_roster("John Doe"), checkin_table, input_fields)

        assert matches[0].found
        assert matches[0].record.row_number == 3

    def test_suspected_test_entries_are_flagged(self):
        header = ["first", "last", "email"]
        table = Table.from_rows(
            [
                {"first": "Grace", "last": "Bello", "email": "grace@x.com"},
                {"first": "Test", "last": "Er", "email": "t@a.com"},
            ],
            header=header,
        )
        fields = FieldMap(first_name="first", last_name="last", email="email")

        matches = match_roster(parse_roster("Grace Bello\nTest Er"), table, fields)

        assert [m.suspect for m in matches] == [False, True]
