"""Card ratings, formations and ideal-team selection."""

from .models import Card, Formation, FormationSlot, MatchResult, Player
from .selector import IdealTeamSlot, generate_ideal_team
from .stats import classify_performance, classify_versatility, compute_stats

__all__ = [
    "Card",
    "Formation",
    "FormationSlot",
    "IdealTeamSlot",
    "MatchResult",
    "Player",
    "classify_performance",
    "classify_versatility",
    "compute_stats",
    "generate_ideal_team",
]
