"""Pydantic models for API I/O."""

from .formation import FormationRequest, FormationSummaryResponse, MatchResultRequest, PresetResponse
from .roster import (
    AddRatingRequest,
    CardUsageResponse,
    ImportReportResponse,
    PlayerPerformanceResponse,
    PositionPerformanceResponse,
    PositionRankingResponse,
    RenamePlayerRequest,
    UpdateCardRequest,
)
from .team import (
    AssignedPlayerResponse,
    IdealTeamRequest,
    IdealTeamResponse,
    IdealTeamSlotResponse,
    PerformanceResponse,
    SlotRequest,
)

__all__ = [
    "AddRatingRequest",
    "AssignedPlayerResponse",
    "CardUsageResponse",
    "FormationRequest",
    "FormationSummaryResponse",
    "IdealTeamRequest",
    "IdealTeamResponse",
    "IdealTeamSlotResponse",
    "ImportReportResponse",
    "MatchResultRequest",
    "PerformanceResponse",
    "PlayerPerformanceResponse",
    "PositionPerformanceResponse",
    "PositionRankingResponse",
    "PresetResponse",
    "RenamePlayerRequest",
    "SlotRequest",
    "UpdateCardRequest",
]
