"""Rating statistics, performance signals and formation records."""

from .formation import FormationRecord, match_outcome, summarize_results
from .performance import (
    EMPTY_STATS,
    CardUsage,
    PerformanceFlags,
    PerformanceStats,
    PositionPerformance,
    PositionRankingEntry,
    StatsSummary,
    classify_performance,
    classify_versatility,
    compute_stats,
    most_used_cards,
    performance_stats,
    player_position_summary,
    position_ranking,
)

__all__ = [
    "EMPTY_STATS",
    "CardUsage",
    "FormationRecord",
    "PerformanceFlags",
    "PerformanceStats",
    "PositionPerformance",
    "PositionRankingEntry",
    "StatsSummary",
    "classify_performance",
    "classify_versatility",
    "compute_stats",
    "match_outcome",
    "most_used_cards",
    "performance_stats",
    "player_position_summary",
    "position_ranking",
    "summarize_results",
]
