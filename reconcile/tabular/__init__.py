"""Tabular file reading and writing."""

from __future__ import annotations

from .reader import parse_table, read_table, read_text_file
from .writer import format_table, write_table

__all__ = [
    "format_table",
    "parse_table",
    "read_table",
    "read_text_file",
    "write_table",
]
