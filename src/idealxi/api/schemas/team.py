from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from idealxi.selector import AssignedPlayer, IdealTeamSlot


class SlotRequest(BaseModel):
    position: str
    styles: List[str] = Field(default_factory=list)


class IdealTeamRequest(BaseModel):
    formation_id: str | None = None
    preset: str | None = None
    slots: List[SlotRequest] | None = None
    discarded_card_ids: List[str] = Field(default_factory=list)
    recent_window: int | None = Field(default=None, ge=1, le=50)


class PerformanceResponse(BaseModel):
    average: float
    matches: int
    std_dev: float
    is_hot_streak: bool
    is_consistent: bool
    is_promising: bool
    is_versatile: bool


class AssignedPlayerResponse(BaseModel):
    player_id: str
    player_name: str
    card_id: str
    card_name: str
    style: str
    position: str
    reason: str
    is_placeholder: bool
    stats: PerformanceResponse

    @classmethod
    def from_assigned(cls, assigned: AssignedPlayer) -> "AssignedPlayerResponse":
        stats = assigned.stats
        return cls(
            player_id=assigned.player_id,
            player_name=assigned.player_name,
            card_id=assigned.card_id,
            card_name=assigned.card_name,
            style=assigned.style,
            position=assigned.position,
            reason=assigned.reason,
            is_placeholder=assigned.is_placeholder,
            stats=PerformanceResponse(
                average=stats.average,
                matches=stats.matches,
                std_dev=stats.std_dev,
                is_hot_streak=stats.is_hot_streak,
                is_consistent=stats.is_consistent,
                is_promising=stats.is_promising,
                is_versatile=stats.is_versatile,
            ),
        )


class IdealTeamSlotResponse(BaseModel):
    index: int
    position: str
    styles: List[str]
    starter: AssignedPlayerResponse
    substitute: AssignedPlayerResponse

    @classmethod
    def from_slot(cls, slot: IdealTeamSlot) -> "IdealTeamSlotResponse":
        return cls(
            index=slot.index,
            position=slot.slot.position,
            styles=list(slot.slot.styles),
            starter=AssignedPlayerResponse.from_assigned(slot.starter),
            substitute=AssignedPlayerResponse.from_assigned(slot.substitute),
        )


class IdealTeamResponse(BaseModel):
    formation_name: str
    slots: List[IdealTeamSlotResponse]
    vacancies: int
