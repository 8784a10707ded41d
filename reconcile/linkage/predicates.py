"""Predicate builders for filtering linked pairs.

A predicate receives (input record, matched reference record) and returns
whether the pair should be kept. Business rules such as "camping is yes
and location is outside Benin" are composed here and injected into
select_matches(), never coded into the Linker."""

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import RawRecord
from ..errors import ConfigError
from .linker import MatchPredicate


def _clean(value: str) -> str:
    return value.strip().lower()


def reference_field_equals(field_name: str, expected: str) -> MatchPredicate:
    """Reference field equals expected, ignoring case and surrounding whitespace."""
    wanted = _clean(expected)

    def predicate(_record: RawRecord, reference: RawRecord) -> bool:
        return _clean(reference.get(field_name)) == wanted

    return predicate


def reference_field_contains_any(field_name: str, words: Iterable[str]) -> MatchPredicate:
    """Reference field contains at least one of words, ignoring case."""
    wanted = [_clean(word) for word in words if word.strip()]

    def predicate(_record: RawRecord, reference: RawRecord) -> bool:
        value = _clean(reference.get(field_name))
        return any(word in value for word in wanted)

    return predicate


def all_of(*predicates: MatchPredicate) -> MatchPredicate:
    """All predicates hold; with no predicates every pair is kept."""

    def predicate(record: RawRecord, reference: RawRecord) -> bool:
        return all(p(record, reference) for p in predicates)

    return predicate


def parse_where(expressions: Iterable[str]) -> MatchPredicate:
    """Build a predicate from FIELD=VALUE expressions (reference fields, AND-ed).

    Raises:
        ConfigError: If an expression has no "=" or an empty field name
    """
    predicates = []
    for expression in expressions:
        field_name, sep, value = expression.partition("=")
        if not sep or not field_name.strip():
            raise ConfigError(f"Invalid filter '{expression}', expected FIELD=VALUE")
        predicates.append(reference_field_equals(field_name.strip(), value))
    return all_of(*predicates)
