from __future__ import annotations

from pydantic import BaseModel, Field


class AddRatingRequest(BaseModel):
    player_name: str = ""
    player_id: str | None = None
    card_name: str = Field(..., min_length=1)
    position: str
    style: str = "None"
    rating: float = Field(..., ge=1.0, le=10.0)


class UpdateCardRequest(BaseModel):
    name: str | None = None
    style: str | None = None
    image_url: str | None = None


class ImportReportResponse(BaseModel):
    total_rows: int
    imported_ratings: int
    players: int
    cards: int
    skipped_rows: list[str] = Field(default_factory=list)


class PositionPerformanceResponse(BaseModel):
    position: str
    group: str
    average: float
    matches: int


class CardUsageResponse(BaseModel):
    card_id: str
    name: str
    style: str
    matches: int


class PlayerPerformanceResponse(BaseModel):
    player_id: str
    name: str
    positions: list[PositionPerformanceResponse]
    most_used_cards: list[CardUsageResponse]


class RenamePlayerRequest(BaseModel):
    name: str = Field(..., min_length=1)


class PositionRankingResponse(BaseModel):
    player_id: str
    player_name: str
    card_id: str
    card_name: str
    style: str
    average: float
    matches: int
