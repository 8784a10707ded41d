"""Heuristics for spotting throwaway registrations."""

from __future__ import annotations

from ..shared.name_utils import normalize_email

# Email fragments only seen in made-up addresses
THROWAWAY_EMAIL_MARKERS = ("@a.com", "@.com", "aaaaa.com")
MAX_TEST_NAME_LENGTH = 3


def looks_like_test_entry(name: str, email: str = "") -> bool:
    """Check if a registration looks like a test or junk entry.

    Very short names ("M T"), single-letter names and throwaway email
    domains are treated as test entries.
    """
    name = " ".join(name.lower().split())
    if len(name) <= MAX_TEST_NAME_LENGTH:
        return True
    if len(name.split(" ")) == 1 and len(name) <= 2:
        return True

    email = normalize_email(email)
    return any(marker in email for marker in THROWAWAY_EMAIL_MARKERS)
