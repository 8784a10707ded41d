"""Partitioner - classifies records into groups and removes duplicates

Records are processed in source order. Within a partition the first
record with a given key is kept and later ones are reported as
duplicates with their source row numbers. Duplicates are never detected
across partitions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from ..core.models import DuplicateEntry, FieldMap, PartitionState, RawRecord, Table
from ..shared.name_utils import name_key

logger = logging.getLogger(__name__)

Classifier = Callable[[RawRecord], str]
KeyFunction = Callable[[RawRecord], str]
LabelFunction = Callable[[RawRecord], str]


@dataclass
class PartitionResult:
    """Result of partitioning one table"""

    header: tuple[str, ...]
    partitions: dict[str, PartitionState] = field(default_factory=dict)
    skipped_rows: list[int] = field(default_factory=list)
    total_records: int = 0

    @property
    def statistics(self) -> dict[str, int]:
        stats = {
            "total_records": self.total_records,
            "skipped_blank_names": len(self.skipped_rows),
        }
        for name, state in self.partitions.items():
            stats[f"{name}_output"] = state.output_count
            stats[f"{name}_duplicates"] = len(state.duplicates)
        return stats


def flag_classifier(
    field_name: str,
    truthy: str = "yes",
    positive: str = "campers",
    negative: str = "non-campers",
) -> Classifier:
    """Classify by a yes/no style field: truthy (case-insensitive) vs anything else."""
    wanted = truthy.strip().lower()

    def classify(record: RawRecord) -> str:
        return positive if record.get(field_name).strip().lower() == wanted else negative

    return classify


def name_dedup_key(fields: FieldMap) -> KeyFunction:
    """Dedup key from the normalized first and last name."""

    def key(record: RawRecord) -> str:
        return name_key(fields.first(record), fields.last(record))

    return key


class Partitioner:
    """Splits records into mutually exclusive, deduplicated partitions"""

    def __init__(
        self,
        classify: Classifier,
        key: KeyFunction,
        required_fields: Sequence[str] = (),
        label: LabelFunction | None = None,
        partition_names: Sequence[str] = (),
    ):
        """Initialize the partitioner.

        Args:
            classify: Maps a record to its partition name
            key: Derives the dedup key of a record
            required_fields: Records with any of these blank are skipped
            label: Human-readable label for duplicate reports (defaults to
                the required field values joined by spaces)
            partition_names: Partitions to create up front, so they appear
                in the result even when empty
        """
        self.classify = classify
        self.key = key
        self.required_fields = tuple(required_fields)
        self.label = label or self._default_label
        self.partition_names = tuple(partition_names)

    @classmethod
    def by_name(
        cls,
        fields: FieldMap,
        classify: Classifier,
        partition_names: Sequence[str] = (),
    ) -> Partitioner:
        """Partitioner keyed on normalized first/last name."""
        return cls(
            classify=classify,
            key=name_dedup_key(fields),
            required_fields=(fields.first_name, fields.last_name),
            label=fields.display_name,
            partition_names=partition_names,
        )

    def _default_label(self, record: RawRecord) -> str:
        return " ".join(record.get(name).strip() for name in self.required_fields).strip()

    def _is_blank(self, record: RawRecord) -> bool:
        return any(not record.get(name).strip() for name in self.required_fields)

    def partition(self, records: Iterable[RawRecord], header: Sequence[str] = ()) -> PartitionResult:
        """Classify and deduplicate records, in order.

        Args:
            records: Records to process
            header: Field order for output (defaults to the first record's fields)

        Returns:
            PartitionResult with one PartitionState per partition
        """
        result = PartitionResult(header=tuple(header))
        for name in self.partition_names:
            result.partitions[name] = PartitionState(name=name)

        for record in records:
            result.total_records += 1
            if not result.header:
                result.header = tuple(record)

            if self._is_blank(record):
                result.skipped_rows.append(record.row_number)
                continue

            partition_name = self.classify(record)
            state = result.partitions.setdefault(partition_name, PartitionState(name=partition_name))
            dedup_key = self.key(record)

            if dedup_key in state.seen:
                duplicate = DuplicateEntry(row_number=record.row_number, label=self.label(record))
                state.duplicates.append(duplicate)
                logger.debug(f"{partition_name}: {duplicate}")
                continue

            state.seen.add(dedup_key)
            state.records.append(record)

        logger.info(
            f"Partitioned {result.total_records} record(s): "
            + ", ".join(
                f"{name}={state.output_count} ({len(state.duplicates)} duplicate(s))"
                for name, state in result.partitions.items()
            )
            + f", {len(result.skipped_rows)} without a name"
        )
        return result

    def partition_table(self, table: Table) -> PartitionResult:
        return self.partition(table.records, header=table.header)
