"""Ideal-team selection built on top of the stats engine."""

from .service import (
    SUBSTITUTE_TIERS,
    AssignedPlayer,
    Candidate,
    IdealTeamSlot,
    build_candidates,
    generate_ideal_team,
    placeholder,
)

__all__ = [
    "SUBSTITUTE_TIERS",
    "AssignedPlayer",
    "Candidate",
    "IdealTeamSlot",
    "build_candidates",
    "generate_ideal_team",
    "placeholder",
]
