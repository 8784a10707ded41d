"""Linkage strategies.

Each strategy tries one way of finding the reference record for an input
record. The Linker runs them in order; the first hit wins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.models import FieldMap, MatchResult, MatchType, RawRecord
from ..matching import NameMatcher
from ..shared.name_utils import full_name
from .record_index import RecordIndex


class LinkStrategy(ABC):
    """Base class for linkage strategies"""

    def __init__(self, index: RecordIndex):
        self.index = index

    @abstractmethod
    def resolve(self, record: RawRecord, fields: FieldMap) -> MatchResult | None:
        """Attempt to link a record.

        Args:
            record: The input record
            fields: Where the input table keeps names and email

        Returns:
            A matched MatchResult, or None to let the next strategy try
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name for logging and debugging"""
        pass


class EmailKeyStrategy(LinkStrategy):
    """Exact lookup by normalized email"""

    @property
    def name(self) -> str:
        return "email_key"

    def resolve(self, record: RawRecord, fields: FieldMap) -> MatchResult | None:
        entry = self.index.lookup_email(fields.email_of(record))
        if entry is None:
            return None
        return MatchResult(
            record=record,
            match_type=MatchType.EMAIL,
            matched_record=entry.record,
            reference_position=entry.position,
        )


class NameKeyStrategy(LinkStrategy):
    """Exact lookup by normalized first/last name"""

    @property
    def name(self) -> str:
        return "name_key"

    def resolve(self, record: RawRecord, fields: FieldMap) -> MatchResult | None:
        entry = self.index.lookup_name(fields.first(record), fields.last(record))
        if entry is None:
            return None
        return MatchResult(
            record=record,
            match_type=MatchType.NAME,
            matched_record=entry.record,
            reference_position=entry.position,
        )


class FuzzyScanStrategy(LinkStrategy):
    """Linear scan of the reference rows with the name matcher.

    Candidates are tried in reference order against both their forward
    and reversed names. The first candidate that matches is returned, even
    if a later one would match on a stronger tier.
    """

    def __init__(self, index: RecordIndex, matcher: NameMatcher | None = None):
        super().__init__(index)
        self.matcher = matcher or NameMatcher()

    @property
    def name(self) -> str:
        return "fuzzy_scan"

    def resolve(self, record: RawRecord, fields: FieldMap) -> MatchResult | None:
        target = full_name(fields.first(record), fields.last(record))
        if not target:
            return None

        found = self.index.find_candidate(target, self.matcher)
        if found is None:
            return None
        candidate, tier = found
        return MatchResult(
            record=record,
            match_type=MatchType.FUZZY,
            matched_record=candidate.record,
            tier=tier,
            reference_position=candidate.position,
        )
