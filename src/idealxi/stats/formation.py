"""Win/draw/loss summaries for a formation's recorded matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from idealxi.models import MatchResult


Outcome = Literal["win", "draw", "loss"]


@dataclass(frozen=True)
class FormationRecord:
    total: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    effectiveness: float

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


def match_outcome(result: MatchResult) -> Outcome:
    if result.goals_for > result.goals_against:
        return "win"
    if result.goals_for < result.goals_against:
        return "loss"
    return "draw"


def summarize_results(matches: Sequence[MatchResult]) -> FormationRecord:
    """Tally outcomes; effectiveness is points won over points available, in percent."""

    total = len(matches)
    outcomes = [match_outcome(match) for match in matches]
    wins = outcomes.count("win")
    draws = outcomes.count("draw")
    effectiveness = ((wins * 3 + draws) / (total * 3)) * 100 if total else 0.0
    return FormationRecord(
        total=total,
        wins=wins,
        draws=draws,
        losses=outcomes.count("loss"),
        goals_for=sum(match.goals_for for match in matches),
        goals_against=sum(match.goals_against for match in matches),
        effectiveness=effectiveness,
    )
