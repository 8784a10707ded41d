"""Reconciliation error classes.

Fatal conditions raise one of these; recoverable ones (malformed rows,
index key collisions, unmatched records) are logged and counted instead.
"""

from __future__ import annotations


class ReconcileError(Exception):
    """Base exception for reconciliation errors."""

    pass


class MissingFileError(ReconcileError):
    """Raised when a reference or input path does not exist."""

    def __init__(self, path: str, role: str = "input"):
        self.path = path
        self.role = role
        super().__init__(f"{role.capitalize()} file not found: {path}")


class UnreadableFileError(ReconcileError):
    """Raised when an existing file cannot be read or decoded."""

    def __init__(self, path: str, reason: str, role: str = "input"):
        self.path = path
        self.reason = reason
        self.role = role
        super().__init__(f"Could not read {role} file {path}: {reason}")


class OutputWriteError(ReconcileError):
    """Raised when an output artifact cannot be created or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")


class ConfigError(ReconcileError):
    """Raised when field mappings or filter expressions are invalid."""

    pass


class SourceUnavailableError(ReconcileError):
    """Raised when a PocketBase collection cannot be read."""

    pass
