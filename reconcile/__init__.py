"""
Reconcile - record linkage and deduplication for camp check-in data.

This package contains:
- tabular: delimited file reader/writer
- shared: name, email and phone normalization
- matching: multi-tier fuzzy name matcher
- linkage: namespaced record index, linker and roster matching
- processing: partitioner/deduplicator and test-entry screening
- reporting: run summaries and output artifacts
- jobs: batch jobs over in-memory tables
"""

from reconcile.core.models import FieldMap, MatchResult, MatchType, NamespacedKey, RawRecord, Table
from reconcile.jobs import run_linkage, run_partition, run_roster
from reconcile.linkage import Linker, RecordIndex, select_matches
from reconcile.matching import NameMatcher, names_match
from reconcile.processing import Partitioner
from reconcile.shared import normalize_email, normalize_name

__all__ = [
    "FieldMap",
    "Linker",
    "MatchResult",
    "MatchType",
    "NameMatcher",
    "NamespacedKey",
    "Partitioner",
    "RawRecord",
    "RecordIndex",
    "Table",
    "names_match",
    "normalize_email",
    "normalize_name",
    "run_linkage",
    "run_partition",
    "run_roster",
    "select_matches",
]
