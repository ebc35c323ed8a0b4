"""CSV export helpers for generated teams."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from idealxi.selector import AssignedPlayer, IdealTeamSlot


EXPORT_HEADERS = (
    "slot",
    "position",
    "preferred_styles",
    "role",
    "player_id",
    "player_name",
    "card_id",
    "card_name",
    "style",
    "average",
    "matches",
    "std_dev",
    "hot_streak",
    "consistent",
    "promising",
    "versatile",
    "reason",
)


def _row(slot: IdealTeamSlot, role: str, assigned: AssignedPlayer) -> list[object]:
    stats = assigned.stats
    if assigned.is_placeholder:
        player_id = card_id = ""
    else:
        player_id, card_id = assigned.player_id, assigned.card_id
    return [
        slot.index + 1,
        slot.slot.position,
        "|".join(slot.slot.styles),
        role,
        player_id,
        assigned.player_name,
        card_id,
        assigned.card_name,
        assigned.style,
        f"{stats.average:.2f}",
        stats.matches,
        f"{stats.std_dev:.2f}",
        int(stats.is_hot_streak),
        int(stats.is_consistent),
        int(stats.is_promising),
        int(stats.is_versatile),
        assigned.reason,
    ]


def ideal_team_to_csv(team: Sequence[IdealTeamSlot]) -> str:
    """Render one row per starter and substitute, in slot order."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for slot in team:
        writer.writerow(_row(slot, "starter", slot.starter))
        writer.writerow(_row(slot, "substitute", slot.substitute))
    return buffer.getvalue()
