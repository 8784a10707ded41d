"""Batch jobs.

Pure functions that take already-loaded tables and return structured
results plus a RunSummary. File and database access stays in the CLI, so
every job can be run against in-memory tables."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .core.models import FieldMap, MatchResult, MatchType, RawRecord, Table
from .linkage import LinkageResult, Linker, MatchPredicate, RecordIndex, RosterEntry, RosterMatch, select_matches
from .linkage.roster import match_roster
from .matching import NameMatcher
from .processing import Classifier, PartitionResult, Partitioner
from .reporting import Artifact, DuplicateSummary, PartitionSummary, RunSummary

logger = logging.getLogger(__name__)

INPUT_PREFIX = "Input "
REFERENCE_PREFIX = "Reference "


@dataclass
class LinkageRun:
    """Everything produced by run_linkage()"""

    reference: Table
    inputs: Table
    index: RecordIndex
    result: LinkageResult
    summary: RunSummary
    selected: list[MatchResult] | None = None


@dataclass
class PartitionRun:
    """Everything produced by run_partition()"""

    table: Table
    result: PartitionResult
    summary: RunSummary


@dataclass
class RosterRun:
    """Everything produced by run_roster()"""

    table: Table
    matches: list[RosterMatch]
    summary: RunSummary = field(default_factory=lambda: RunSummary(job="roster"))


def run_linkage(
    reference: Table,
    inputs: Table,
    reference_fields: FieldMap,
    input_fields: FieldMap,
    predicate: MatchPredicate | None = None,
    matcher: NameMatcher | None = None,
) -> LinkageRun:
    """Link every input record against the reference table.

    Args:
        reference: Registration (reference) table
        inputs: Check-in (input) table
        reference_fields: Name/email fields of the reference table
        input_fields: Name/email fields of the input table
        predicate: Optional filter over (input, reference) pairs
        matcher: Name matcher for the fuzzy fallback

    Raises:
        ConfigError: If a mapped field is missing from a header
    """
    reference_fields.check_header(reference.header, role="reference")
    input_fields.check_header(inputs.header, role="input")

    index = RecordIndex.build(reference, reference_fields)
    result = Linker(index, input_fields, matcher=matcher).link(inputs.records)
    selected = select_matches(result.results, predicate) if predicate is not None else None

    counts = result.counts_by_type()
    summary = RunSummary(
        job="link",
        total_input=len(inputs),
        malformed_rows=list(inputs.malformed_rows),
        reference_total=len(reference),
        reference_malformed_rows=list(reference.malformed_rows),
        index_collisions=len(index.collisions),
        matched_by_type={t.value: counts[t] for t in MatchType if t is not MatchType.NONE},
        unmatched=counts[MatchType.NONE],
        selected=len(selected) if selected is not None else None,
    )
    return LinkageRun(
        reference=reference, inputs=inputs, index=index, result=result, summary=summary, selected=selected
    )


def run_partition(
    table: Table,
    fields: FieldMap,
    classify: Classifier,
    partition_names: Sequence[str] = (),
) -> PartitionRun:
    """Split a table into deduplicated partitions keyed on normalized name."""
    # Only the name fields are needed here; email is not part of the dedup key
    name_fields = FieldMap(fields.first_name, fields.last_name)
    name_fields.check_header(table.header, role="input")

    partitioner = Partitioner.by_name(name_fields, classify, partition_names=partition_names)
    result = partitioner.partition_table(table)

    summary = RunSummary(
        job="partition",
        total_input=len(table),
        malformed_rows=list(table.malformed_rows),
        skipped_blank_names=len(result.skipped_rows),
        partitions=[
            PartitionSummary(
                name=state.name,
                output_count=state.output_count,
                duplicates=[DuplicateSummary(row_number=d.row_number, label=d.label) for d in state.duplicates],
            )
            for state in result.partitions.values()
        ],
    )
    return PartitionRun(table=table, result=result, summary=summary)


def run_roster(
    entries: Iterable[RosterEntry],
    table: Table,
    fields: FieldMap,
    matcher: NameMatcher | None = None,
) -> RosterRun:
    """Look up each expected roster name in a table."""
    fields.check_header(table.header, role="reference")
    matches = match_roster(entries, table, fields, matcher)
    found = [m for m in matches if m.found]
    summary = RunSummary(
        job="roster",
        total_input=len(matches),
        reference_total=len(table),
        reference_malformed_rows=list(table.malformed_rows),
        roster_found=len(found),
        roster_suspect=sum(1 for m in found if m.suspect),
        unmatched=len(matches) - len(found),
    )
    return RosterRun(table=table, matches=matches, summary=summary)


def _prefixed(record: RawRecord | None, header: Sequence[str], prefix: str) -> dict[str, str]:
    if record is None:
        return {f"{prefix}{name}": "" for name in header}
    return {f"{prefix}{name}": record.get(name) for name in header}


def linkage_artifacts(run: LinkageRun, output_dir: str | Path) -> list[Artifact]:
    """Matches, unmatched inputs and (when filtered) the selected matches."""
    output_dir = Path(output_dir)
    match_header = (
        ["Match Type", "Match Tier"]
        + [f"{INPUT_PREFIX}{name}" for name in run.inputs.header]
        + [f"{REFERENCE_PREFIX}{name}" for name in run.reference.header]
    )

    def match_row(result: MatchResult) -> dict[str, str]:
        row = {"Match Type": result.match_type.value, "Match Tier": result.tier or ""}
        row.update(_prefixed(result.record, run.inputs.header, INPUT_PREFIX))
        row.update(_prefixed(result.matched_record, run.reference.header, REFERENCE_PREFIX))
        return row

    artifacts = [
        Artifact("matches", output_dir / "matches.csv", match_header, [match_row(r) for r in run.result.matched]),
        Artifact(
            "unmatched",
            output_dir / "unmatched.csv",
            run.inputs.header,
            [record.to_dict() for record in run.result.unmatched],
        ),
    ]
    if run.selected is not None:
        artifacts.append(
            Artifact("selected", output_dir / "selected.csv", match_header, [match_row(r) for r in run.selected])
        )
    return artifacts


def partition_artifacts(run: PartitionRun, output_dir: str | Path) -> list[Artifact]:
    """One CSV per partition, in the source header order."""
    output_dir = Path(output_dir)
    return [
        Artifact(
            name,
            output_dir / f"{name}_extracted.csv",
            run.result.header,
            [record.to_dict() for record in state.records],
        )
        for name, state in run.result.partitions.items()
    ]


def roster_artifacts(run: RosterRun, output_dir: str | Path) -> list[Artifact]:
    """Found and missing roster names."""
    output_dir = Path(output_dir)
    found_header = ["Expected Name", "Expected Phone", "Match Tier", "Suspected Test Entry"] + [
        f"{REFERENCE_PREFIX}{name}" for name in run.table.header
    ]
    found_rows = []
    missing_rows = []
    for match in run.matches:
        if match.found:
            row = {
                "Expected Name": match.entry.name,
                "Expected Phone": match.entry.phone,
                "Match Tier": match.tier or "",
                "Suspected Test Entry": "yes" if match.suspect else "no",
            }
            row.update(_prefixed(match.record, run.table.header, REFERENCE_PREFIX))
            found_rows.append(row)
        else:
            missing_rows.append({"Expected Name": match.entry.name, "Expected Phone": match.entry.phone})

    return [
        Artifact("roster_found", output_dir / "roster_found.csv", found_header, found_rows),
        Artifact("roster_missing", output_dir / "roster_missing.csv", ["Expected Name", "Expected Phone"], missing_rows),
    ]
