"""Greedy starter/substitute selection over rated player cards."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple, Union

from idealxi.models import DEFAULT_STYLE, Formation, FormationSlot, Player
from idealxi.stats import EMPTY_STATS, PerformanceStats, classify_versatility, performance_stats
from idealxi.stats.performance import DEFAULT_RECENT_WINDOW


logger = logging.getLogger("uvicorn.error")

PLACEHOLDER_PREFIX = "placeholder"
PLACEHOLDER_NAME = "Vacant"
PLACEHOLDER_CARD_NAME = "N/A"

STARTER = "starter"
SUBSTITUTE = "substitute"


@dataclass(frozen=True)
class Candidate:
    """One card fielded at one position, with the stats it earned there."""

    player: Player
    card_id: str
    card_name: str
    style: str
    position: str
    stats: PerformanceStats

    @property
    def player_id(self) -> str:
        return self.player.player_id


@dataclass(frozen=True)
class AssignedPlayer:
    player_id: str
    player_name: str
    card_id: str
    card_name: str
    style: str
    position: str
    stats: PerformanceStats
    reason: str
    is_placeholder: bool = False


@dataclass(frozen=True)
class IdealTeamSlot:
    index: int
    slot: FormationSlot
    starter: AssignedPlayer
    substitute: AssignedPlayer


CandidatePredicate = Callable[[Candidate], bool]

# Substitute tiers, tried in order; the last tier accepts everyone.
SUBSTITUTE_TIERS: Tuple[Tuple[str, CandidatePredicate], ...] = (
    ("hot_streak", lambda c: c.stats.is_hot_streak),
    ("promising", lambda c: c.stats.is_promising and c.stats.matches > 0),
    ("unrated", lambda c: c.stats.is_promising and c.stats.matches == 0),
    ("depth", lambda c: True),
)


def build_candidates(
    players: Sequence[Player],
    slots: Sequence[FormationSlot],
    *,
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> List[Candidate]:
    """Expand the pool into (card, position) candidates in pool/card/position order.

    A card with no ratings anywhere is offered at every slot position with
    empty stats so unrated players stay selectable.
    """

    slot_positions: List[str] = []
    for slot in slots:
        if slot.position not in slot_positions:
            slot_positions.append(slot.position)

    candidates: List[Candidate] = []
    for player in players:
        for card in player.cards:
            rated_positions = card.rated_positions()
            if not rated_positions:
                unrated = performance_stats((), recent_window=recent_window)
                for position in slot_positions:
                    candidates.append(
                        Candidate(
                            player=player,
                            card_id=card.card_id,
                            card_name=card.name,
                            style=card.style,
                            position=position,
                            stats=unrated,
                        )
                    )
                continue

            is_versatile = classify_versatility(card)
            for position in rated_positions:
                candidates.append(
                    Candidate(
                        player=player,
                        card_id=card.card_id,
                        card_name=card.name,
                        style=card.style,
                        position=position,
                        stats=performance_stats(
                            card.ratings_by_position[position],
                            is_versatile=is_versatile,
                            recent_window=recent_window,
                        ),
                    )
                )
    return candidates


def _ranked_for_position(candidates: Sequence[Candidate], position: str) -> List[Candidate]:
    # sorted() is stable with reverse=True, so equal averages keep construction order.
    at_position = [candidate for candidate in candidates if candidate.position == position]
    return sorted(at_position, key=lambda candidate: candidate.stats.average, reverse=True)


def _with_styles(candidates: Sequence[Candidate], styles: Iterable[str]) -> List[Candidate]:
    allowed = set(styles)
    return [candidate for candidate in candidates if candidate.style in allowed]


def _first_available(
    candidates: Iterable[Candidate],
    used_player_ids: Set[str],
    discarded_card_ids: Set[str],
) -> Optional[Candidate]:
    for candidate in candidates:
        if candidate.player_id in used_player_ids:
            continue
        if candidate.card_id in discarded_card_ids:
            continue
        return candidate
    return None


def _pick_starter(
    slot: FormationSlot,
    candidates: Sequence[Candidate],
    used_player_ids: Set[str],
    discarded_card_ids: Set[str],
) -> Tuple[Optional[Candidate], str]:
    ranked = _ranked_for_position(candidates, slot.position)
    if slot.styles:
        match = _first_available(_with_styles(ranked, slot.styles), used_player_ids, discarded_card_ids)
        if match is not None:
            return match, "style_match"
    return _first_available(ranked, used_player_ids, discarded_card_ids), "best_available"


def _pick_substitute(
    slot: FormationSlot,
    candidates: Sequence[Candidate],
    used_player_ids: Set[str],
    discarded_card_ids: Set[str],
) -> Tuple[Optional[Candidate], str]:
    ranked = _ranked_for_position(candidates, slot.position)
    pools = [_with_styles(ranked, slot.styles), ranked] if slot.styles else [ranked]
    for pool in pools:
        for tier_name, predicate in SUBSTITUTE_TIERS:
            tier = (candidate for candidate in pool if predicate(candidate))
            match = _first_available(tier, used_player_ids, discarded_card_ids)
            if match is not None:
                return match, tier_name
    return None, "vacant"


def _assigned(candidate: Candidate, reason: str) -> AssignedPlayer:
    return AssignedPlayer(
        player_id=candidate.player_id,
        player_name=candidate.player.name,
        card_id=candidate.card_id,
        card_name=candidate.card_name,
        style=candidate.style,
        position=candidate.position,
        stats=candidate.stats,
        reason=reason,
    )


def placeholder(slot: FormationSlot, index: int, role: str) -> AssignedPlayer:
    """Synthetic occupant for a slot nobody could fill."""

    return AssignedPlayer(
        player_id=f"{PLACEHOLDER_PREFIX}-{role}-{index}",
        player_name=PLACEHOLDER_NAME,
        card_id=f"{PLACEHOLDER_PREFIX}-card-{role}-{index}",
        card_name=PLACEHOLDER_CARD_NAME,
        style=DEFAULT_STYLE,
        position=slot.position,
        stats=EMPTY_STATS,
        reason="vacant",
        is_placeholder=True,
    )


def generate_ideal_team(
    players: Sequence[Player],
    formation: Union[Formation, Sequence[FormationSlot]],
    discarded_card_ids: Iterable[str] = (),
    *,
    recent_window: int = DEFAULT_RECENT_WINDOW,
) -> List[IdealTeamSlot]:
    """Assign a starter and a substitute to every formation slot.

    Starters are chosen for all slots first, then substitutes, each pass
    walking the slots in formation order. A player is used at most once
    across the whole team. Slots left empty get a placeholder, so the result
    always has one entry per slot.
    """

    slots: Tuple[FormationSlot, ...] = formation.slots if isinstance(formation, Formation) else tuple(formation)
    discarded = set(discarded_card_ids)
    candidates = build_candidates(players, slots, recent_window=recent_window)
    used_player_ids: Set[str] = set()

    starters: List[Tuple[Optional[Candidate], str]] = []
    for index, slot in enumerate(slots):
        pick, reason = _pick_starter(slot, candidates, used_player_ids, discarded)
        if pick is not None:
            used_player_ids.add(pick.player_id)
            logger.debug("Slot %s (%s) starter: %s [%s]", index, slot.position, pick.player.name, reason)
        starters.append((pick, reason))

    substitutes: List[Tuple[Optional[Candidate], str]] = []
    for index, slot in enumerate(slots):
        pick, reason = _pick_substitute(slot, candidates, used_player_ids, discarded)
        if pick is not None:
            used_player_ids.add(pick.player_id)
            logger.debug("Slot %s (%s) substitute: %s [%s]", index, slot.position, pick.player.name, reason)
        substitutes.append((pick, reason))

    team: List[IdealTeamSlot] = []
    vacancies = 0
    for index, slot in enumerate(slots):
        starter, starter_reason = starters[index]
        substitute, substitute_reason = substitutes[index]
        if starter is None:
            vacancies += 1
        if substitute is None:
            vacancies += 1
        team.append(
            IdealTeamSlot(
                index=index,
                slot=slot,
                starter=_assigned(starter, starter_reason) if starter else placeholder(slot, index, STARTER),
                substitute=(
                    _assigned(substitute, substitute_reason) if substitute else placeholder(slot, index, SUBSTITUTE)
                ),
            )
        )

    logger.info(
        "Ideal team built for %s slots from %s candidates (%s players, %s discarded cards, %s vacancies)",
        len(slots),
        len(candidates),
        len(players),
        len(discarded),
        vacancies,
    )
    return team
