"""Tests for partitioning and first-seen deduplication."""

from __future__ import annotations

from reconcile.core.models import DuplicateEntry, FieldMap, Table
from reconcile.processing import Partitioner, flag_classifier, name_dedup_key

FIELDS = FieldMap(first_name="First Name", last_name="Last Name (Surname)")
HEADER = ["First Name", "Last Name (Surname)", "Are you camping?"]
PARTITIONS = ("campers", "non-campers")


def make_table(*rows: tuple[str, str, str]) -> Table:
    return Table.from_rows([dict(zip(HEADER, row)) for row in rows], header=HEADER)


def camping_partitioner() -> Partitioner:
    return Partitioner.by_name(FIELDS, flag_classifier("Are you camping?"), partition_names=PARTITIONS)


class TestFlagClassifier:
    def test_yes_is_case_insensitive(self):
        classify = flag_classifier("Are you camping?")
        table = make_table(("A", "B", "Yes"), ("C", "D", " YES "), ("E", "F", "No"), ("G", "H", ""))

        assert [classify(r) for r in table] == ["campers", "campers", "non-campers", "non-campers"]

    def test_custom_names_and_value(self):
        classify = flag_classifier("Are you camping?", truthy="y", positive="in", negative="out")

        assert [classify(r) for r in make_table(("A", "B", "Y"), ("C", "D", "Yes"))] == ["in", "out"]


class TestDeduplication:
    def test_first_seen_wins_with_normalized_names(self):
        table = make_table(("Sam", "Okoro", "Yes"), ("sam", " okoro ", "Yes"))

        result = camping_partitioner().partition_table(table)

        campers = result.partitions["campers"]
        assert campers.output_count == 1
        assert campers.records[0]["First Name"] == "Sam"
        assert campers.duplicates == [DuplicateEntry(row_number=3, label="sam okoro")]
        assert str(campers.duplicates[0]) == "Row 3: sam okoro - duplicate name"

    def test_no_deduplication_across_partitions(self):
        table = make_table(("Sam", "Okoro", "Yes"), ("Sam", "Okoro", "No"))

        result = camping_partitioner().partition_table(table)

        assert result.partitions["campers"].output_count == 1
        assert result.partitions["non-campers"].output_count == 1
        assert result.partitions["campers"].duplicates == []

    def test_swapped_names_are_distinct(self):
        table = make_table(("Sam", "Okoro", "Yes"), ("Okoro", "Sam", "Yes"))

        result = camping_partitioner().partition_table(table)

        assert result.partitions["campers"].output_count == 2

    def test_duplicates_keep_source_order(self):
        table = make_table(
            ("Ada", "Obi", "Yes"),
            ("Ada", "Obi", "Yes"),
            ("Kim", "Ade", "Yes"),
            ("ADA", "OBI", "Yes"),
        )

        result = camping_partitioner().partition_table(table)

        assert [d.row_number for d in result.partitions["campers"].duplicates] == [3, 5]


class TestPartitioning:
    def test_registration_split(self, registration_table, reference_fields):
        result = Partitioner.by_name(
            reference_fields, flag_classifier("Are you camping?"), partition_names=PARTITIONS
        ).partition_table(registration_table)

        campers = result.partitions["campers"]
        non_campers = result.partitions["non-campers"]
        assert [r["First Name"] for r in campers.records] == ["Ann", "Maria", "Chidi"]
        assert [r["First Name"] for r in non_campers.records] == ["John"]
        assert result.skipped_rows == [6]
        # every record is either skipped or lands in exactly one partition
        kept_or_dropped = sum(s.output_count + len(s.duplicates) for s in result.partitions.values())
        assert len(result.partitions) == 2
        assert kept_or_dropped == result.total_records - len(result.skipped_rows)

    def test_blank_names_are_skipped(self):
        table = make_table(("", "Okoro", "Yes"), ("Sam", "  ", "Yes"), ("Sam", "Okoro", "Yes"))

        result = camping_partitioner().partition_table(table)

        assert result.skipped_rows == [2, 3]
        assert result.partitions["campers"].output_count == 1

    def test_declared_partitions_exist_when_empty(self):
        result = camping_partitioner().partition_table(make_table(("Sam", "Okoro", "Yes")))

        assert list(result.partitions) == ["campers", "non-campers"]
        assert result.partitions["non-campers"].output_count == 0

    def test_undeclared_partitions_are_created_on_demand(self):
        partitioner = Partitioner.by_name(FIELDS, lambda record: record.get("Are you camping?").lower() or "unknown")

        result = partitioner.partition_table(make_table(("A", "B", "Maybe"), ("C", "D", "")))

        assert list(result.partitions) == ["maybe", "unknown"]

    def test_header_defaults_to_first_record(self):
        table = make_table(("Sam", "Okoro", "Yes"))

        result = camping_partitioner().partition(table.records)

        assert result.header == tuple(HEADER)

    def test_statistics(self):
        table = make_table(("Sam", "Okoro", "Yes"), ("sam", "okoro", "Yes"), ("Kim", "Ade", "No"), ("", "", "No"))

        stats = camping_partitioner().partition_table(table).statistics

        assert stats == {
            "total_records": 4,
            "skipped_blank_names": 1,
            "campers_output": 1,
            "campers_duplicates": 1,
            "non-campers_output": 1,
            "non-campers_duplicates": 0,
        }


class TestCustomKeys:
    def test_default_label_uses_required_fields(self):
        partitioner = Partitioner(
            classify=lambda record: "all",
            key=lambda record: record.get("Are you camping?"),
            required_fields=("First Name",),
        )

        result = partitioner.partition_table(make_table(("Sam", "Okoro", "x"), ("Kim", "Ade", "x")))

        assert str(result.partitions["all"].duplicates[0]) == "Row 3: Kim - duplicate name"

    def test_name_dedup_key(self):
        key = name_dedup_key(FIELDS)
        table = make_table(("Mary Ann", "Lee", ""), ("Mary", "Ann Lee", ""))

        assert key(table.records[0]) != key(table.records[1])
