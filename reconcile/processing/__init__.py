"""Processing components for partitioning and screening records."""

from __future__ import annotations

from .partitioner import Classifier, KeyFunction, PartitionResult, Partitioner, flag_classifier, name_dedup_key
from .screening import looks_like_test_entry

__all__ = [
    "Classifier",
    "KeyFunction",
    "PartitionResult",
    "Partitioner",
    "flag_classifier",
    "looks_like_test_entry",
    "name_dedup_key",
]
