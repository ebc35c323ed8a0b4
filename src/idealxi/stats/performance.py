"""Rating statistics and performance signals for cards and players."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean, pstdev
from typing import Dict, List, Optional, Sequence, Tuple

from idealxi.models import Card, Player


HOT_STREAK_MIN_MATCHES = 3
HOT_STREAK_MARGIN = 0.5
CONSISTENT_MIN_MATCHES = 5
CONSISTENT_MAX_STD_DEV = 0.5
PROMISING_MAX_MATCHES = 10
VERSATILE_MIN_AVERAGE = 7.5
VERSATILE_MIN_POSITIONS = 3
DEFAULT_RECENT_WINDOW = 3


@dataclass(frozen=True)
class StatsSummary:
    average: float
    matches: int
    std_dev: float


@dataclass(frozen=True)
class PerformanceFlags:
    is_hot_streak: bool
    is_consistent: bool
    is_promising: bool


@dataclass(frozen=True)
class PerformanceStats:
    """Statistics and signals for one card at one position."""

    average: float
    matches: int
    std_dev: float
    is_hot_streak: bool = False
    is_consistent: bool = False
    is_promising: bool = False
    is_versatile: bool = False


EMPTY_STATS = PerformanceStats(average=0.0, matches=0, std_dev=0.0)


@dataclass(frozen=True)
class PositionPerformance:
    position: str
    average: float
    matches: int


@dataclass(frozen=True)
class PositionRankingEntry:
    player_id: str
    player_name: str
    card_id: str
    card_name: str
    style: str
    average: float
    matches: int


@dataclass(frozen=True)
class CardUsage:
    card_id: str
    name: str
    style: str
    matches: int


def compute_stats(ratings: Sequence[float]) -> StatsSummary:
    """Mean and population standard deviation; an empty history is all zeros."""

    matches = len(ratings)
    if matches == 0:
        return StatsSummary(average=0.0, matches=0, std_dev=0.0)
    return StatsSummary(average=fmean(ratings), matches=matches, std_dev=pstdev(ratings))


def classify_performance(
    ratings: Sequence[float],
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> PerformanceFlags:
    summary = compute_stats(ratings)
    is_hot_streak = False
    if summary.matches >= HOT_STREAK_MIN_MATCHES and recent_window > 0:
        recent = list(ratings)[-recent_window:]
        is_hot_streak = fmean(recent) > summary.average + HOT_STREAK_MARGIN
    return PerformanceFlags(
        is_hot_streak=is_hot_streak,
        is_consistent=summary.matches >= CONSISTENT_MIN_MATCHES and summary.std_dev < CONSISTENT_MAX_STD_DEV,
        is_promising=summary.matches < PROMISING_MAX_MATCHES,
    )


def classify_versatility(card: Card) -> bool:
    """A card is versatile when three or more of its positions average 7.5+."""

    strong_positions = 0
    for ratings in card.ratings_by_position.values():
        if not ratings:
            continue
        if compute_stats(ratings).average >= VERSATILE_MIN_AVERAGE:
            strong_positions += 1
    return strong_positions >= VERSATILE_MIN_POSITIONS


def performance_stats(
    ratings: Sequence[float],
    *,
    is_versatile: bool = False,
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> PerformanceStats:
    summary = compute_stats(ratings)
    flags = classify_performance(ratings, recent_window=recent_window)
    return PerformanceStats(
        average=summary.average,
        matches=summary.matches,
        std_dev=summary.std_dev,
        is_hot_streak=flags.is_hot_streak,
        is_consistent=flags.is_consistent,
        is_promising=flags.is_promising,
        is_versatile=is_versatile,
    )


def player_position_summary(player: Player) -> List[PositionPerformance]:
    """Pool every card's ratings per position, best average first."""

    pooled: Dict[str, List[float]] = {}
    for card in player.cards:
        for position, ratings in card.ratings_by_position.items():
            if ratings:
                pooled.setdefault(position, []).extend(ratings)

    summary = [
        PositionPerformance(position=position, average=fmean(ratings), matches=len(ratings))
        for position, ratings in pooled.items()
    ]
    return sorted(summary, key=lambda item: item.average, reverse=True)


def most_used_cards(player: Player, limit: int = 5) -> Tuple[CardUsage, ...]:
    usage = [
        CardUsage(card_id=card.card_id, name=card.name, style=card.style, matches=card.total_matches)
        for card in player.cards
        if card.total_matches > 0
    ]
    usage.sort(key=lambda item: item.matches, reverse=True)
    return tuple(usage[: max(limit, 0)])


def position_ranking(
    players: Sequence[Player],
    position: str,
    search: Optional[str] = None,
) -> List[PositionRankingEntry]:
    """Every card rated at ``position``, best average first, then most matches.

    ``search`` keeps players whose name contains it, ignoring case.
    """

    needle = (search or "").strip().lower()
    entries: List[PositionRankingEntry] = []
    for player in players:
        if needle and needle not in player.name.lower():
            continue
        for card in player.cards:
            ratings = card.ratings_by_position.get(position)
            if not ratings:
                continue
            entries.append(
                PositionRankingEntry(
                    player_id=player.player_id,
                    player_name=player.name,
                    card_id=card.card_id,
                    card_name=card.name,
                    style=card.style,
                    average=fmean(ratings),
                    matches=len(ratings),
                )
            )
    entries.sort(key=lambda item: (item.average, item.matches), reverse=True)
    return entries
