"""Namespaced lookup index over a reference table.

Reference rows are indexed under a name key and, when present, an email
key. A later row whose key collides with an earlier one replaces it
(last write wins); collisions are logged and counted, not resolved."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.models import FieldMap, NamespacedKey, RawRecord, Table
from ..logging_config import TRACE
from ..matching import NameMatcher
from ..shared.name_utils import full_name, name_key, normalize_email, reversed_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """A reference record and its position in the reference table"""

    record: RawRecord
    position: int


@dataclass(frozen=True)
class Candidate:
    """A reference record prepared for fuzzy comparison"""

    record: RawRecord
    position: int
    forward_name: str
    reversed_name: str


class RecordIndex:
    """Key-to-record lookup built from a reference dataset"""

    def __init__(self, fields: FieldMap):
        """Initialize an empty index.

        Args:
            fields: Where the reference table keeps names and email
        """
        self.fields = fields
        self._entries: dict[NamespacedKey, IndexEntry] = {}
        self.candidates: list[Candidate] = []
        self.collisions: list[NamespacedKey] = []
        self.skipped_rows: list[int] = []

    @classmethod
    def build(cls, table: Table, fields: FieldMap) -> RecordIndex:
        """Index every reference row that has both a first and a last name."""
        index = cls(fields)
        for position, record in enumerate(table.records):
            index.add_record(record, position)

        logger.info(
            f"Built reference index with {len(index)} key(s) from {len(index.candidates)} row(s); "
            f"{len(index.skipped_rows)} row(s) without a name, {len(index.collisions)} key collision(s)"
        )
        return index

    def add_record(self, record: RawRecord, position: int) -> bool:
        """Index one reference record.

        Returns:
            False if the record was skipped for missing a first or last name
        """
        first = self.fields.first(record)
        last = self.fields.last(record)
        if not first or not last:
            self.skipped_rows.append(record.row_number)
            return False

        entry = IndexEntry(record=record, position=position)
        self.insert(NamespacedKey.name(name_key(first, last)), entry)

        email = normalize_email(self.fields.email_of(record))
        if email:
            self.insert(NamespacedKey.email(email), entry)

        self.candidates.append(
            Candidate(
                record=record,
                position=position,
                forward_name=full_name(first, last),
                reversed_name=reversed_name(first, last),
            )
        )
        return True

    def insert(self, key: NamespacedKey, entry: IndexEntry) -> None:
        """Insert or overwrite the entry stored under key."""
        previous = self._entries.get(key)
        if previous is not None and previous.record is not entry.record:
            logger.warning(
                f"Index key {key} from row {entry.record.row_number} overwrites row {previous.record.row_number}"
            )
            self.collisions.append(key)
        self._entries[key] = entry

    def find_candidate(self, target: str, matcher: NameMatcher) -> tuple[Candidate, str] | None:
        """Return the first candidate, in reference order, matching target.

        Each candidate is tried by its forward name, then its reversed name.

        Returns:
            (candidate, tier name), or None if no candidate matches
        """
        tracing = logger.isEnabledFor(TRACE)
        for candidate in self.candidates:
            tier = matcher.match_tier(target, candidate.forward_name) or matcher.match_tier(
                target, candidate.reversed_name
            )
            if tracing:
                logger.log(TRACE, f"'{target}' vs '{candidate.forward_name}': {tier or 'no match'}")
            if tier:
                return candidate, tier
        return None

    def get(self, key: NamespacedKey) -> IndexEntry | None:
        return self._entries.get(key)

    def lookup_email(self, email: str) -> IndexEntry | None:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return self.get(NamespacedKey.email(normalized))

    def lookup_name(self, first: str, last: str) -> IndexEntry | None:
        if not first.strip() and not last.strip():
            return None
        return self.get(NamespacedKey.name(name_key(first, last)))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
