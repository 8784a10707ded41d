"""Roster matching.

Matches a free-text list of expected people ("12.Pastor Ada Obi:0803 123 4567")
against a table, for questions like "which of the delegates we expected
actually checked in?"."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import FieldMap, RawRecord, Table
from ..matching import NameMatcher
from ..processing.screening import looks_like_test_entry
from ..shared.name_utils import normalize_name, normalize_phone
from .record_index import RecordIndex

logger = logging.getLogger(__name__)

_NUMBERING = re.compile(r"^\d+\.")
_PHONE = re.compile(r":?(\d[\d\s]{9,})")
_HONORIFIC = re.compile(r"^(Pastor|Mr|Mrs|Miss|Dr)\.?\s+", re.IGNORECASE)


@dataclass(frozen=True)
class RosterEntry:
    """One expected person parsed from a roster line"""

    name: str
    first_name: str
    last_name: str
    phone: str = ""


@dataclass(frozen=True)
class RosterMatch:
    """Where (if anywhere) an expected person was found"""

    entry: RosterEntry
    record: RawRecord | None = None
    tier: str | None = None
    suspect: bool = False

    @property
    def found(self) -> bool:
        return self.record is not None


def parse_roster_line(line: str) -> RosterEntry | None:
    """Parse one roster line; returns None for lines without a name."""
    text = _NUMBERING.sub("", line.strip()).strip()

    phone = ""
    phone_match = _PHONE.search(text)
    if phone_match:
        phone = normalize_phone(phone_match.group(1))
        text = (text[: phone_match.start()] + text[phone_match.end() :]).strip().rstrip(":").strip()

    text = _HONORIFIC.sub("", text).strip()
    parts = text.split()
    if not parts:
        return None

    return RosterEntry(name=" ".join(parts), first_name=parts[0], last_name=" ".join(parts[1:]), phone=phone)


def parse_roster(text: str) -> list[RosterEntry]:
    """Parse a roster, dropping repeated people (same normalized name)."""
    entries: list[RosterEntry] = []
    seen: set[str] = set()
    for line in text.splitlines():
        entry = parse_roster_line(line)
        if entry is None:
            continue
        key = normalize_name(entry.name)
        if key in seen:
            logger.debug(f"Roster lists '{entry.name}' more than once")
            continue
        seen.add(key)
        entries.append(entry)
    return entries


def match_roster(
    entries: Iterable[RosterEntry],
    table: Table,
    fields: FieldMap,
    matcher: NameMatcher | None = None,
) -> list[RosterMatch]:
    """Find each expected person in table.

    Rows are tried in table order against their forward and reversed
    names; the first row that matches is taken.
    """
    matcher = matcher or NameMatcher()
    index = RecordIndex.build(table, fields)

    matches: list[RosterMatch] = []
    for entry in entries:
        target = normalize_name(entry.name)
        found = index.find_candidate(target, matcher)
        if found is None:
            matches.append(RosterMatch(entry=entry))
            continue
        candidate, tier = found
        suspect = looks_like_test_entry(fields.display_name(candidate.record), fields.email_of(candidate.record))
        matches.append(RosterMatch(entry=entry, record=candidate.record, tier=tier, suspect=suspect))

    logger.info(f"Found {sum(1 for m in matches if m.found)} of {len(matches)} roster name(s)")
    return matches
