"""Formation models: slots, match results and the formation document."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class FormationSlot(BaseModel):
    """One on-field slot. An empty ``styles`` tuple means no style preference."""

    position: str
    styles: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class MatchResult(BaseModel):
    match_id: str = Field(..., min_length=1)
    goals_for: int = Field(..., ge=0)
    goals_against: int = Field(..., ge=0)
    played_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)


class Formation(BaseModel):
    """Ordered slots plus the match history recorded while using them."""

    formation_id: str = Field(..., min_length=1)
    name: str
    slots: Tuple[FormationSlot, ...]
    play_style: str = "Possession Game"
    source_url: Optional[str] = None
    matches: Tuple[MatchResult, ...] = ()

    model_config = ConfigDict(frozen=True)
