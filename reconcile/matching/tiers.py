"""Name matching tiers.

Each tier compares two names that have already been through
normalize_name(). Tiers are binary; none of them computes a score."""

from __future__ import annotations

from ..shared.name_utils import tokenize
from .interfaces import MatchTier

# Tokens shorter than this are ignored by the token-based tiers ("anna l")
MIN_TOKEN_LENGTH = 2
# Only tokens at least this long count towards overlap
MIN_OVERLAP_TOKEN_LENGTH = 3
# Overlap count that matches on its own
MIN_OVERLAP_COUNT = 2


class ExactTier(MatchTier):
    """Identical strings."""

    @property
    def name(self) -> str:
        return "exact"

    def matches(self, first: str, second: str) -> bool:
        return first == second


class ReorderedTokensTier(MatchTier):
    """Same tokens in a different order, e.g. "john doe" / "doe john"."""

    @property
    def name(self) -> str:
        return "reordered_tokens"

    def matches(self, first: str, second: str) -> bool:
        tokens1 = tokenize(first, MIN_TOKEN_LENGTH)
        tokens2 = tokenize(second, MIN_TOKEN_LENGTH)
        if not tokens1 or not tokens2 or len(tokens1) != len(tokens2):
            return False
        return " ".join(sorted(tokens1)) == " ".join(sorted(tokens2))


class ContainmentTier(MatchTier):
    """One full name is a substring of the other, e.g. "john smith" / "john smith jr"."""

    @property
    def name(self) -> str:
        return "containment"

    def matches(self, first: str, second: str) -> bool:
        return first in second or second in first


class TokenOverlapTier(MatchTier):
    """Enough long tokens appear in both names.

    Matches when at least two tokens of three or more characters are
    shared, or when both names have two or more tokens and every token of
    the shorter name is shared.
    """

    @property
    def name(self) -> str:
        return "token_overlap"

    def matches(self, first: str, second: str) -> bool:
        tokens1 = set(tokenize(first, MIN_TOKEN_LENGTH))
        tokens2 = set(tokenize(second, MIN_TOKEN_LENGTH))
        if not tokens1 or not tokens2:
            return False

        overlap = sum(1 for token in tokens1 if len(token) >= MIN_OVERLAP_TOKEN_LENGTH and token in tokens2)
        if overlap >= MIN_OVERLAP_COUNT:
            return True
        return len(tokens1) >= 2 and len(tokens2) >= 2 and overlap == min(len(tokens1), len(tokens2))


DEFAULT_TIERS: tuple[MatchTier, ...] = (
    ExactTier(),
    ReorderedTokensTier(),
    ContainmentTier(),
    TokenOverlapTier(),
)
