"""Tests for post-match filter predicates."""

from __future__ import annotations

import pytest

from reconcile.core.models import RawRecord
from reconcile.errors import ConfigError
from reconcile.linkage import all_of, parse_where, reference_field_contains_any, reference_field_equals

CHECKIN = RawRecord({"camper_firstName": "Ann"})
REGISTRATION = RawRecord(
    {
        "First Name": "Ann",
        "Are you camping?": " Yes ",
        "What city/state do you stay in?": "Outside Benin",
    }
)


class TestPredicates:
    def test_field_equals_ignores_case_and_whitespace(self):
        assert reference_field_equals("Are you camping?", "yes")(CHECKIN, REGISTRATION)
        assert not reference_field_equals("Are you camping?", "no")(CHECKIN, REGISTRATION)

    def test_missing_field_compares_as_empty(self):
        assert reference_field_equals("Not a column", "")(CHECKIN, REGISTRATION)
        assert not reference_field_equals("Not a column", "yes")(CHECKIN, REGISTRATION)

    def test_contains_any(self):
        predicate = reference_field_contains_any("What city/state do you stay in?", ["lagos", "OUTSIDE"])

        assert predicate(CHECKIN, REGISTRATION)
        assert not reference_field_contains_any("What city/state do you stay in?", ["delta"])(CHECKIN, REGISTRATION)

    def test_all_of(self):
        yes = reference_field_equals("Are you camping?", "yes")
        outside = reference_field_equals("What city/state do you stay in?", "outside benin")
        benin = reference_field_equals("What city/state do you stay in?", "benin")

        assert all_of(yes, outside)(CHECKIN, REGISTRATION)
        assert not all_of(yes, benin)(CHECKIN, REGISTRATION)
        assert all_of()(CHECKIN, REGISTRATION)


class TestParseWhere:
    def test_expressions_are_and_ed(self):
        predicate = parse_where(["Are you camping?=Yes", "What city/state do you stay in?=Outside Benin"])

        assert predicate(CHECKIN, REGISTRATION)
        assert not parse_where(["Are you camping?=Yes", "First Name=Bob"])(CHECKIN, REGISTRATION)

    def test_value_may_contain_equals_sign(self):
        record = RawRecord({"note": "a=b"})

        assert parse_where(["note=a=b"])(CHECKIN, record)

    @pytest.mark.parametrize("expression", ["no separator", "=Yes", "  =Yes"])
    def test_invalid_expression(self, expression):
        with pytest.raises(ConfigError):
            parse_where([expression])
