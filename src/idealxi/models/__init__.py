"""Immutable domain models."""

from .formation import Formation, FormationSlot, MatchResult
from .player import DEFAULT_STYLE, Card, Player

__all__ = [
    "Card",
    "DEFAULT_STYLE",
    "Formation",
    "FormationSlot",
    "MatchResult",
    "Player",
]
