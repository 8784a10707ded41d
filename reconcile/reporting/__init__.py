"""Run reports and output artifacts."""

from __future__ import annotations

from .report_writer import Artifact, render_report, write_artifacts, write_stats_output
from .schemas import ArtifactStatus, DuplicateSummary, PartitionSummary, RunSummary

__all__ = [
    "Artifact",
    "ArtifactStatus",
    "DuplicateSummary",
    "PartitionSummary",
    "RunSummary",
    "render_report",
    "write_artifacts",
    "write_stats_output",
]
