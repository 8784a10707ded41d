"""Name, email and phone normalization utilities."""

from __future__ import annotations

import re

# Anything that is not a letter, digit or whitespace. \w admits "_", so it is excluded explicitly.
_NON_NAME_CHARS = re.compile(r"[^\w\s]|_")
_NON_DIGITS = re.compile(r"\D")

# Joins the parts of a name key; normalization strips it from every part
NAME_KEY_SEPARATOR = "|"


def normalize_name(name: str | None) -> str:
    """Normalize a name for comparison and key derivation.

    1. Convert to lowercase
    2. Strip leading/trailing whitespace
    3. Collapse whitespace runs into single spaces
    4. Remove everything except letters, digits and spaces

    Applying it twice gives the same result as applying it once.

    Args:
        name: The name to normalize

    Returns:
        Normalized name string
    """
    if not name:
        return ""
    collapsed = " ".join(name.lower().split())
    # Stripping punctuation can leave doubled or edge spaces ("a . b")
    return " ".join(_NON_NAME_CHARS.sub("", collapsed).split())


def normalize_email(email: str | None) -> str:
    """Lowercase and trim an email; punctuation is meaningful and kept."""
    if not email:
        return ""
    return email.strip().lower()


def normalize_phone(phone: str | None) -> str:
    """Keep only the digits of a phone number."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)


def full_name(first: str, last: str) -> str:
    """Normalized "first last" form."""
    return normalize_name(f"{first} {last}")


def reversed_name(first: str, last: str) -> str:
    """Normalized "last first" form, for names entered in swapped order."""
    return normalize_name(f"{last} {first}")


def name_key(first: str, last: str) -> str:
    """Exact-lookup key for a first/last name pair.

    Parts are normalized separately so ("Mary Ann", "Lee") and
    ("Mary", "Ann Lee") produce different keys.
    """
    return f"{normalize_name(first)}{NAME_KEY_SEPARATOR}{normalize_name(last)}"


def tokenize(name: str, min_length: int = 1) -> list[str]:
    """Split a normalized name on whitespace, dropping tokens shorter than min_length."""
    return [token for token in name.split() if len(token) >= min_length]
