"""
Pydantic schemas for run summaries.

The same model backs the printed run report and the JSON written by
--stats-output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ArtifactStatus(BaseModel):
    """Outcome of writing one output file."""

    name: str = Field(..., description="Artifact name, e.g. 'matches' or 'campers'")
    path: str
    success: bool
    rows: int = 0
    error: str | None = None


class DuplicateSummary(BaseModel):
    """A dropped duplicate and the source row it came from."""

    row_number: int
    label: str


class PartitionSummary(BaseModel):
    """Output count and duplicate list of one partition."""

    name: str
    output_count: int = 0
    duplicates: list[DuplicateSummary] = Field(default_factory=list)


class RunSummary(BaseModel):
    """Counts describing one batch run."""

    job: str = Field(..., description="'link', 'partition' or 'roster'")
    total_input: int = 0
    malformed_rows: list[int] = Field(default_factory=list)
    reference_total: int | None = None
    reference_malformed_rows: list[int] = Field(default_factory=list)
    index_collisions: int = 0
    matched_by_type: dict[str, int] = Field(default_factory=dict)
    unmatched: int = 0
    selected: int | None = None
    skipped_blank_names: int = 0
    partitions: list[PartitionSummary] = Field(default_factory=list)
    roster_found: int | None = None
    roster_suspect: int | None = None
    artifacts: list[ArtifactStatus] = Field(default_factory=list)

    @property
    def malformed_count(self) -> int:
        return len(self.malformed_rows)

    @property
    def matched(self) -> int:
        return sum(count for match_type, count in self.matched_by_type.items() if match_type != "none")

    @property
    def artifacts_ok(self) -> bool:
        return all(artifact.success for artifact in self.artifacts)
