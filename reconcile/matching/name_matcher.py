"""Multi-tier name matcher.

Runs its tiers in order and stops at the first one that is satisfied.
Order is significant: an exact match always wins over a token overlap."""

from __future__ import annotations

from collections.abc import Sequence

from .interfaces import MatchTier
from .tiers import DEFAULT_TIERS


class NameMatcher:
    """Binary fuzzy equality test between two normalized names"""

    def __init__(self, tiers: Sequence[MatchTier] | None = None):
        """Initialize the matcher.

        Args:
            tiers: Tiers to evaluate, in priority order (defaults to
                exact, reordered tokens, containment, token overlap)
        """
        self.tiers: list[MatchTier] = list(tiers) if tiers is not None else list(DEFAULT_TIERS)

    def add_tier(self, tier: MatchTier) -> None:
        """Append a tier with the lowest priority"""
        self.tiers.append(tier)

    def match_tier(self, first: str, second: str) -> str | None:
        """Return the name of the first satisfied tier, or None.

        Empty names never match.
        """
        if not first or not second:
            return None
        for tier in self.tiers:
            if tier.matches(first, second):
                return tier.name
        return None

    def match(self, first: str, second: str) -> bool:
        return self.match_tier(first, second) is not None


_default_matcher = NameMatcher()


def names_match(first: str, second: str) -> bool:
    """Match two normalized names with the default tiers."""
    return _default_matcher.match(first, second)
