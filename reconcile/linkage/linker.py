"""Linker for resolving input records against a reference index.

Runs the configured strategies in priority order (email key, name key,
fuzzy scan by default) and produces exactly one MatchResult per input
record."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..core.models import FieldMap, MatchResult, MatchType, RawRecord
from ..matching import NameMatcher
from .record_index import RecordIndex
from .strategies import EmailKeyStrategy, FuzzyScanStrategy, LinkStrategy, NameKeyStrategy

logger = logging.getLogger(__name__)

# (input record, matched reference record) -> keep?
MatchPredicate = Callable[[RawRecord, RawRecord], bool]


@dataclass
class LinkageResult:
    """All MatchResults of one linking run, in input order"""

    results: list[MatchResult] = field(default_factory=list)

    @property
    def matched(self) -> list[MatchResult]:
        return [r for r in self.results if r.matched]

    @property
    def unmatched(self) -> list[RawRecord]:
        return [r.record for r in self.results if not r.matched]

    def counts_by_type(self) -> dict[MatchType, int]:
        """Number of results per match type, including zero counts."""
        counts = Counter(r.match_type for r in self.results)
        return {match_type: counts.get(match_type, 0) for match_type in MatchType}


class Linker:
    """Resolves input records against a RecordIndex"""

    def __init__(
        self,
        index: RecordIndex,
        input_fields: FieldMap,
        strategies: Iterable[LinkStrategy] | None = None,
        matcher: NameMatcher | None = None,
    ):
        """Initialize the linker.

        Args:
            index: Reference index to query
            input_fields: Where input records keep names and email
            strategies: Strategies in priority order (defaults to email key,
                name key, fuzzy scan)
            matcher: Name matcher for the default fuzzy scan
        """
        self.index = index
        self.input_fields = input_fields
        if strategies is None:
            strategies = [
                EmailKeyStrategy(index),
                NameKeyStrategy(index),
                FuzzyScanStrategy(index, matcher),
            ]
        self.strategies: list[LinkStrategy] = list(strategies)

    def add_strategy(self, strategy: LinkStrategy) -> None:
        """Append a strategy with the lowest priority"""
        self.strategies.append(strategy)

    def link_record(self, record: RawRecord) -> MatchResult:
        """Link a single record; never returns None."""
        for strategy in self.strategies:
            result = strategy.resolve(record, self.input_fields)
            if result is not None:
                matched_row = result.matched_record.row_number if result.matched_record else None
                logger.debug(f"Row {record.row_number} matched reference row {matched_row} by {strategy.name}")
                return result

        logger.debug(f"Row {record.row_number} ({self.input_fields.display_name(record)}) has no match")
        return MatchResult.unmatched(record)

    def link(self, records: Iterable[RawRecord]) -> LinkageResult:
        """Link every record, in order."""
        result = LinkageResult(results=[self.link_record(record) for record in records])

        counts = result.counts_by_type()
        logger.info(
            f"Linked {len(result.results)} record(s): "
            + ", ".join(f"{match_type.value}={count}" for match_type, count in counts.items())
        )
        return result


def select_matches(results: Iterable[MatchResult], predicate: MatchPredicate) -> list[MatchResult]:
    """Keep the matched results whose (input, reference) pair satisfies predicate."""
    return [
        result
        for result in results
        if result.matched_record is not None and predicate(result.record, result.matched_record)
    ]
