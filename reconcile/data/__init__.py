"""Database-backed table sources."""

from __future__ import annotations

from .pocketbase_source import connect, load_collection

__all__ = ["connect", "load_collection"]
