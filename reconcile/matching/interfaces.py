"""Interfaces for the name matching tiers.

Defines the contract every tier of the name matcher implements."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MatchTier(ABC):
    """One ordered rule of the name matcher"""

    @abstractmethod
    def matches(self, first: str, second: str) -> bool:
        """Decide whether two normalized names match under this rule.

        Args:
            first: A normalized name
            second: Another normalized name

        Returns:
            True if the rule is satisfied
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Tier name for logging and reports"""
        pass
