"""Core domain models."""

from __future__ import annotations

from .models import (
    FIRST_DATA_ROW,
    DuplicateEntry,
    FieldMap,
    KeyDomain,
    MatchResult,
    MatchType,
    NamespacedKey,
    PartitionState,
    RawRecord,
    Table,
)

__all__ = [
    "FIRST_DATA_ROW",
    "DuplicateEntry",
    "FieldMap",
    "KeyDomain",
    "MatchResult",
    "MatchType",
    "NamespacedKey",
    "PartitionState",
    "RawRecord",
    "Table",
]
