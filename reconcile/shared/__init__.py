"""Shared utilities module."""

from __future__ import annotations

from .name_utils import (
    NAME_KEY_SEPARATOR,
    full_name,
    name_key,
    normalize_email,
    normalize_name,
    normalize_phone,
    reversed_name,
    tokenize,
)

__all__ = [
    "NAME_KEY_SEPARATOR",
    "full_name",
    "name_key",
    "normalize_email",
    "normalize_name",
    "normalize_phone",
    "reversed_name",
    "tokenize",
]
