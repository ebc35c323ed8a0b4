from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .team import SlotRequest


class FormationRequest(BaseModel):
    name: str = Field(..., min_length=1)
    play_style: str = "Possession Game"
    source_url: str | None = None
    preset: str | None = None
    slots: list[SlotRequest] | None = None


class MatchResultRequest(BaseModel):
    goals_for: int = Field(..., ge=0)
    goals_against: int = Field(..., ge=0)
    played_at: datetime | None = None


class PresetResponse(BaseModel):
    name: str
    positions: list[str]


class FormationSummaryResponse(BaseModel):
    formation_id: str
    name: str
    play_style: str
    total: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    effectiveness: float
