"""Name matching system.

Provides the tier interface, the standard tiers and the ordered matcher."""

from __future__ import annotations

from .interfaces import MatchTier
from .name_matcher import NameMatcher, names_match
from .tiers import DEFAULT_TIERS, ContainmentTier, ExactTier, ReorderedTokensTier, TokenOverlapTier

__all__ = [
    "DEFAULT_TIERS",
    "ContainmentTier",
    "ExactTier",
    "MatchTier",
    "NameMatcher",
    "ReorderedTokensTier",
    "TokenOverlapTier",
    "names_match",
]
