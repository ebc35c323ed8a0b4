"""REST API for roster tracking and ideal-team selection."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from idealxi.api.schemas import (
    AddRatingRequest,
    CardUsageResponse,
    FormationRequest,
    FormationSummaryResponse,
    IdealTeamRequest,
    IdealTeamResponse,
    IdealTeamSlotResponse,
    ImportReportResponse,
    MatchResultRequest,
    PlayerPerformanceResponse,
    PositionPerformanceResponse,
    PositionRankingResponse,
    PresetResponse,
    RenamePlayerRequest,
    SlotRequest,
    UpdateCardRequest,
)
from idealxi.config import (
    get_position_group,
    get_preset,
    iter_presets,
    normalize_formation_style,
    normalize_position,
    validate_formation_slots,
)
from idealxi.config_loader import default_recent_window
from idealxi.export import ideal_team_to_csv
from idealxi.ingest import load_players_from_csv
from idealxi.models import Formation, FormationSlot, Player
from idealxi.persistence import RosterStore
from idealxi.roster import (
    RosterError,
    add_rating,
    delete_card,
    delete_position_ratings,
    delete_rating,
    find_player,
    rename_player,
    update_card,
)
from idealxi.selector import IdealTeamSlot, generate_ideal_team
from idealxi.stats import most_used_cards, player_position_summary, position_ranking, summarize_results


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        return json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    tmp.write(contents)
    tmp.flush()
    tmp.close()
    return Path(tmp.name)


def _slots_from_request(
    preset: str | None,
    slots: list[SlotRequest] | None,
) -> tuple[str, tuple[FormationSlot, ...]]:
    if slots:
        try:
            return "Custom", validate_formation_slots([slot.model_dump() for slot in slots])
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
    if preset:
        try:
            chosen = get_preset(preset)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown preset {preset!r}") from exc
        return chosen.name, chosen.slots()
    raise HTTPException(status_code=400, detail="Provide formation_id, preset or slots")


def _position_group(position: str) -> str:
    try:
        return get_position_group(position)
    except KeyError:
        return "Unknown"


def create_app(store: RosterStore | None = None) -> FastAPI:
    app = FastAPI(title="idealxi")
    store = store or RosterStore()
    app.state.roster_store = store

    def _fetch_player_or_404(player_id: str) -> Player:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    def _fetch_formation_or_404(formation_id: str) -> Formation:
        formation = store.get_formation(formation_id)
        if formation is None:
            raise HTTPException(status_code=404, detail="Formation not found")
        return formation

    def _build_team(request: IdealTeamRequest) -> tuple[str, list[IdealTeamSlot]]:
        if request.formation_id:
            formation = _fetch_formation_or_404(request.formation_id)
            name, slots = formation.name, formation.slots
        else:
            name, slots = _slots_from_request(request.preset, request.slots)
        recent_window = request.recent_window or default_recent_window()
        team = generate_ideal_team(
            store.list_players(),
            slots,
            request.discarded_card_ids,
            recent_window=recent_window,
        )
        return name, team

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=list[Player])
    async def list_players() -> list[Player]:
        return store.list_players()

    @app.get("/players/{player_id}", response_model=Player)
    async def get_player(player_id: str) -> Player:
        return _fetch_player_or_404(player_id)

    @app.delete("/players/{player_id}")
    async def delete_player(player_id: str) -> dict[str, Any]:
        if not store.delete_player(player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        return {"player_id": player_id, "deleted": True}

    @app.patch("/players/{player_id}", response_model=Player)
    async def edit_player(player_id: str, request: RenamePlayerRequest) -> Player:
        player = _fetch_player_or_404(player_id)
        try:
            updated = rename_player(player, request.name)
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.save_player(updated)

    @app.post("/ratings", response_model=Player)
    async def create_rating(request: AddRatingRequest) -> Player:
        players = store.list_players()
        try:
            _, player = add_rating(
                players,
                player_name=request.player_name,
                player_id=request.player_id,
                card_name=request.card_name,
                position=request.position,
                style=request.style,
                rating=request.rating,
            )
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.save_player(player)

    @app.delete("/players/{player_id}/cards/{card_id}/ratings/{position}/{index}", response_model=Player)
    async def remove_rating(player_id: str, card_id: str, position: str, index: int) -> Player:
        player = _fetch_player_or_404(player_id)
        try:
            updated = delete_rating(player, card_id=card_id, position=position.upper(), index=index)
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.save_player(updated)

    @app.delete("/players/{player_id}/cards/{card_id}/ratings/{position}", response_model=Player)
    async def clear_position(player_id: str, card_id: str, position: str) -> Player:
        player = _fetch_player_or_404(player_id)
        try:
            updated = delete_position_ratings(player, card_id, position.upper())
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.save_player(updated)

    @app.patch("/players/{player_id}/cards/{card_id}", response_model=Player)
    async def edit_card(player_id: str, card_id: str, request: UpdateCardRequest) -> Player:
        player = _fetch_player_or_404(player_id)
        try:
            updated = update_card(
                player,
                card_id,
                name=request.name,
                style=request.style,
                image_url=request.image_url,
            )
        except RosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return store.save_player(updated)

    @app.delete("/players/{player_id}/cards/{card_id}", response_model=Player)
    async def remove_card(player_id: str, card_id: str) -> Player:
        player = _fetch_player_or_404(player_id)
        try:
            updated = delete_card(player, card_id)
        except RosterError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return store.save_player(updated)

    @app.get("/players/{player_id}/performance", response_model=PlayerPerformanceResponse)
    async def player_performance(player_id: str) -> PlayerPerformanceResponse:
        player = _fetch_player_or_404(player_id)
        return PlayerPerformanceResponse(
            player_id=player.player_id,
            name=player.name,
            positions=[
                PositionPerformanceResponse(
                    position=entry.position,
                    group=_position_group(entry.position),
                    average=round(entry.average, 2),
                    matches=entry.matches,
                )
                for entry in player_position_summary(player)
            ],
            most_used_cards=[
                CardUsageResponse(card_id=card.card_id, name=card.name, style=card.style, matches=card.matches)
                for card in most_used_cards(player)
            ],
        )

    @app.get("/positions/{position}/players", response_model=list[PositionRankingResponse])
    async def players_at_position(position: str, search: str | None = None) -> list[PositionRankingResponse]:
        try:
            code = normalize_position(position)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return [
            PositionRankingResponse(
                player_id=entry.player_id,
                player_name=entry.player_name,
                card_id=entry.card_id,
                card_name=entry.card_name,
                style=entry.style,
                average=round(entry.average, 2),
                matches=entry.matches,
            )
            for entry in position_ranking(store.list_players(), code, search)
        ]

    @app.post("/roster/import", response_model=ImportReportResponse)
    async def import_roster(
        ratings: UploadFile = File(...),
        mapping: str | None = Form(None),
    ) -> ImportReportResponse:
        path = await _write_temp(ratings)
        if path is None:
            raise HTTPException(status_code=400, detail="ratings file is empty")
        try:
            imported, report = load_players_from_csv(path, mapping=_parse_mapping(mapping) or None)
        except (KeyError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            path.unlink(missing_ok=True)

        existing = store.list_players()
        for player in imported:
            current = find_player(existing, player_id=player.player_id) or find_player(existing, name=player.name)
            if current is not None:
                player = player.model_copy(update={"player_id": current.player_id})
            store.save_player(player)

        return ImportReportResponse(
            total_rows=report.total_rows,
            imported_ratings=report.imported_ratings,
            players=report.players,
            cards=report.cards,
            skipped_rows=report.skipped_rows,
        )

    @app.get("/formations/presets", response_model=list[PresetResponse])
    async def list_presets() -> list[PresetResponse]:
        return [PresetResponse(name=preset.name, positions=list(preset.positions)) for preset in iter_presets()]

    @app.get("/formations", response_model=list[Formation])
    async def list_formations() -> list[Formation]:
        return store.list_formations()

    @app.post("/formations", response_model=Formation)
    async def create_formation(request: FormationRequest) -> Formation:
        _, slots = _slots_from_request(request.preset, request.slots)
        try:
            play_style = normalize_formation_style(request.play_style)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        formation = Formation(
            formation_id=uuid4().hex,
            name=request.name,
            slots=slots,
            play_style=play_style,
            source_url=request.source_url,
        )
        return store.save_formation(formation)

    @app.get("/formations/{formation_id}", response_model=Formation)
    async def get_formation(formation_id: str) -> Formation:
        return _fetch_formation_or_404(formation_id)

    @app.delete("/formations/{formation_id}")
    async def delete_formation(formation_id: str) -> dict[str, Any]:
        if not store.delete_formation(formation_id):
            raise HTTPException(status_code=404, detail="Formation not found")
        return {"formation_id": formation_id, "deleted": True}

    @app.post("/formations/{formation_id}/matches", response_model=Formation)
    async def add_match(formation_id: str, request: MatchResultRequest) -> Formation:
        _fetch_formation_or_404(formation_id)
        return store.add_match_result(
            formation_id,
            goals_for=request.goals_for,
            goals_against=request.goals_against,
            played_at=request.played_at,
        )

    @app.get("/formations/{formation_id}/summary", response_model=FormationSummaryResponse)
    async def formation_summary(formation_id: str) -> FormationSummaryResponse:
        formation = _fetch_formation_or_404(formation_id)
        record = summarize_results(formation.matches)
        return FormationSummaryResponse(
            formation_id=formation.formation_id,
            name=formation.name,
            play_style=formation.play_style,
            total=record.total,
            wins=record.wins,
            draws=record.draws,
            losses=record.losses,
            goals_for=record.goals_for,
            goals_against=record.goals_against,
            effectiveness=round(record.effectiveness, 2),
        )

    @app.post("/ideal-team", response_model=IdealTeamResponse)
    async def ideal_team(request: IdealTeamRequest) -> IdealTeamResponse:
        name, team = _build_team(request)
        slots = [IdealTeamSlotResponse.from_slot(slot) for slot in team]
        vacancies = sum(int(slot.starter.is_placeholder) + int(slot.substitute.is_placeholder) for slot in slots)
        return IdealTeamResponse(formation_name=name, slots=slots, vacancies=vacancies)

    @app.post("/ideal-team/export.csv")
    async def ideal_team_export(request: IdealTeamRequest):
        name, team = _build_team(request)
        filename = name.replace(" ", "_") or "team"
        return Response(
            content=ideal_team_to_csv(team),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )

    return app
