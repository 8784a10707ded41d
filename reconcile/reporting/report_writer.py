"""Report writer - CSV artifacts, text run report and JSON stats.

Each artifact is written independently: a failure is recorded in its
ArtifactStatus and the remaining artifacts are still attempted."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import OutputWriteError
from ..tabular.writer import write_table
from .schemas import ArtifactStatus, RunSummary

logger = logging.getLogger(__name__)

RULE = "=" * 60


@dataclass
class Artifact:
    """A table waiting to be written"""

    name: str
    path: Path
    header: Sequence[str]
    rows: list[Mapping[str, str]] = field(default_factory=list)


def write_artifacts(artifacts: Iterable[Artifact]) -> list[ArtifactStatus]:
    """Write every artifact, collecting per-artifact success or failure."""
    statuses = []
    for artifact in artifacts:
        try:
            count = write_table(artifact.path, artifact.header, artifact.rows)
        except OutputWriteError as e:
            logger.error(f"Artifact '{artifact.name}' failed: {e}")
            statuses.append(ArtifactStatus(name=artifact.name, path=str(artifact.path), success=False, error=e.reason))
            continue
        statuses.append(ArtifactStatus(name=artifact.name, path=str(artifact.path), success=True, rows=count))
    return statuses


def write_stats_output(path: str | Path, summary: RunSummary) -> None:
    """Write the run summary as JSON.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(summary.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), e.strerror or str(e)) from e
    logger.info(f"Wrote stats to {path}")


def _format_rows(rows: Sequence[int]) -> str:
    return ", ".join(str(row) for row in rows) if rows else "none"


def render_report(summary: RunSummary) -> str:
    """Render a human-readable run report."""
    lines = [RULE, f"RUN SUMMARY ({summary.job})", RULE]

    if summary.reference_total is not None:
        lines.append(f"  Reference records:        {summary.reference_total}")
        lines.append(
            f"  Reference malformed rows: {len(summary.reference_malformed_rows)}"
            f" ({_format_rows(summary.reference_malformed_rows)})"
        )
        lines.append(f"  Index key collisions:     {summary.index_collisions}")

    lines.append(f"  Input records:            {summary.total_input}")
    lines.append(f"  Malformed rows:           {summary.malformed_count} ({_format_rows(summary.malformed_rows)})")

    if summary.matched_by_type:
        lines.append(f"  Matched:                  {summary.matched}")
        for match_type, count in summary.matched_by_type.items():
            lines.append(f"    - by {match_type:<20} {count}")
        lines.append(f"  Unmatched:                {summary.unmatched}")
    if summary.selected is not None:
        lines.append(f"  Selected by filter:       {summary.selected}")

    if summary.roster_found is not None:
        lines.append(f"  Roster names found:       {summary.roster_found}")
        lines.append(f"  Roster names missing:     {summary.unmatched}")
        lines.append(f"  Suspected test entries:   {summary.roster_suspect or 0}")

    if summary.partitions:
        lines.append(f"  Skipped (blank name):     {summary.skipped_blank_names}")
        for partition in summary.partitions:
            lines.append("")
            lines.append(f"  {partition.name}: {partition.output_count} unique record(s)")
            if partition.duplicates:
                lines.append(f"    {len(partition.duplicates)} duplicate(s) skipped:")
                for duplicate in partition.duplicates:
                    lines.append(f"      - Row {duplicate.row_number}: {duplicate.label} - duplicate name")

    if summary.artifacts:
        lines.append("")
        lines.append("  Artifacts:")
        for artifact in summary.artifacts:
            if artifact.success:
                lines.append(f"    [ok]     {artifact.name}: {artifact.rows} row(s) -> {artifact.path}")
            else:
                lines.append(f"    [failed] {artifact.name}: {artifact.path} ({artifact.error})")

    lines.append(RULE)
    return "\n".join(lines)
