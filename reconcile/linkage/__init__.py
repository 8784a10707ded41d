"""Record linkage against a reference dataset.

Provides the namespaced record index, linkage strategies, the linker,
predicate builders for post-match filtering, and roster matching."""

from __future__ import annotations

from .linker import LinkageResult, Linker, MatchPredicate, select_matches
from .predicates import all_of, parse_where, reference_field_contains_any, reference_field_equals
from .record_index import Candidate, IndexEntry, RecordIndex
from .roster import RosterEntry, RosterMatch, match_roster, parse_roster, parse_roster_line
from .strategies import EmailKeyStrategy, FuzzyScanStrategy, LinkStrategy, NameKeyStrategy

__all__ = [
    "Candidate",
    "EmailKeyStrategy",
    "FuzzyScanStrategy",
    "IndexEntry",
    "LinkStrategy",
    "LinkageResult",
    "Linker",
    "MatchPredicate",
    "NameKeyStrategy",
    "RecordIndex",
    "RosterEntry",
    "RosterMatch",
    "all_of",
    "match_roster",
    "parse_roster",
    "parse_roster_line",
    "parse_where",
    "reference_field_contains_any",
    "reference_field_equals",
    "select_matches",
]
