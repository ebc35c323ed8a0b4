"""Helpers to load rating ledgers and formation documents into models."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ValidationError

from idealxi.config import (
    normalize_formation_style,
    normalize_position,
    normalize_style,
    validate_formation_slots,
    validate_rating,
)
from idealxi.models import Card, Formation, Player


logger = logging.getLogger(__name__)

DEFAULT_RATING_MAPPING = {
    "player_id": "player_id",
    "player": "player",
    "card_id": "card_id",
    "card": "card",
    "style": "style",
    "position": "position",
    "rating": "rating",
}


class RatingRow(BaseModel):
    """One ledger line: a single rating for a card at a position."""

    line_number: int
    raw_player_id: Optional[str] = None
    raw_player: str
    raw_card_id: Optional[str] = None
    raw_card: str
    raw_style: Optional[str] = None
    raw_position: str
    raw_rating: str

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str], *, line_number: int = 0) -> "RatingRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key, DEFAULT_RATING_MAPPING.get(key))
            if column is None:
                return default
            value = row.get(column)
            if value is None:
                return default
            value = value.strip()
            return value or default

        return cls(
            line_number=line_number,
            raw_player_id=extract("player_id"),
            raw_player=extract("player", default="") or "",
            raw_card_id=extract("card_id"),
            raw_card=extract("card", default="") or "",
            raw_style=extract("style"),
            raw_position=extract("position", default="") or "",
            raw_rating=extract("rating", default="") or "",
        )


@dataclass(frozen=True)
class ImportReport:
    total_rows: int
    imported_ratings: int
    players: int
    cards: int
    skipped_rows: List[str] = field(default_factory=list)


def load_rating_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RatingRow]:
    mapping = mapping or DEFAULT_RATING_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        # Header is line 1, so data starts at line 2.
        rows = [RatingRow.from_mapping(row, mapping, line_number=idx) for idx, row in enumerate(reader, start=2)]
    return rows


def _parse_rating(raw_rating: str) -> float:
    text = raw_rating.strip().replace(",", ".")
    if not text:
        raise ValueError("rating is empty")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"rating '{raw_rating}' is not numeric") from None
    return validate_rating(value)


def _slug(value: str) -> str:
    return "-".join(value.strip().lower().split())


@dataclass
class _CardDraft:
    card_id: str
    name: str
    style: str
    ratings: Dict[str, List[float]] = field(default_factory=dict)


@dataclass
class _PlayerDraft:
    player_id: str
    name: str
    cards: Dict[str, _CardDraft] = field(default_factory=dict)


def rows_to_players(rows: Sequence[RatingRow]) -> Tuple[List[Player], ImportReport]:
    """Group ledger rows into players and cards, keeping first-seen order.

    Ratings are appended in row order, so the ledger must be chronological.
    Rows that fail validation are skipped and listed in the report.
    """

    drafts: Dict[str, _PlayerDraft] = {}
    skipped: List[str] = []
    imported = 0

    for row in rows:
        try:
            if not row.raw_player:
                raise ValueError("player is empty")
            if not row.raw_card:
                raise ValueError("card is empty")
            position = normalize_position(row.raw_position)
            style = normalize_style(row.raw_style)
            rating = _parse_rating(row.raw_rating)
        except ValueError as exc:
            skipped.append(f"line {row.line_number}: {exc}")
            continue

        player_key = row.raw_player_id or _slug(row.raw_player)
        player = drafts.get(player_key)
        if player is None:
            player = _PlayerDraft(player_id=player_key, name=row.raw_player)
            drafts[player_key] = player

        card_key = row.raw_card_id or f"{player_key}:{_slug(row.raw_card)}"
        card = player.cards.get(card_key)
        if card is None:
            card = _CardDraft(card_id=card_key, name=row.raw_card, style=style)
            player.cards[card_key] = card
        elif row.raw_style and style != card.style:
            logger.debug(
                "Line %s: style %s ignored for card %s (already %s)", row.line_number, style, card.name, card.style
            )

        card.ratings.setdefault(position, []).append(rating)
        imported += 1

    players = [
        Player(
            player_id=draft.player_id,
            name=draft.name,
            cards=tuple(
                Card(
                    card_id=card.card_id,
                    name=card.name,
                    style=card.style,
                    ratings_by_position={pos: tuple(values) for pos, values in card.ratings.items()},
                )
                for card in draft.cards.values()
            ),
        )
        for draft in drafts.values()
    ]
    report = ImportReport(
        total_rows=len(rows),
        imported_ratings=imported,
        players=len(players),
        cards=sum(len(player.cards) for player in players),
        skipped_rows=skipped,
    )
    if skipped:
        logger.warning("Skipped %s of %s rating rows", len(skipped), len(rows))
    logger.info("Imported %s ratings for %s players", imported, len(players))
    return players, report


def load_players_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[Player], ImportReport]:
    return rows_to_players(load_rating_csv(path, mapping=mapping))


def formation_from_payload(payload: Mapping[str, object], *, formation_id: Optional[str] = None) -> Formation:
    """Validate a formation document (eleven slots, known positions and styles)."""

    slots = payload.get("slots")
    if not isinstance(slots, (list, tuple)):
        raise ValueError("formation 'slots' must be a list")
    data = dict(payload)
    data["slots"] = validate_formation_slots(slots)
    data["formation_id"] = formation_id or str(payload.get("formation_id") or payload.get("name") or "")
    if "play_style" in data and data["play_style"] is not None:
        data["play_style"] = normalize_formation_style(str(data["play_style"]))
    else:
        data.pop("play_style", None)
    try:
        return Formation.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid formation: {exc}") from exc


def load_formation_json(path: Path) -> Formation:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return formation_from_payload(payload, formation_id=payload.get("formation_id") or path.stem)


def load_players_json(path: Path) -> List[Player]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON list of players")
    return [Player.model_validate(item) for item in payload]


def dump_players_json(players: Iterable[Player], path: Path) -> None:
    payload = [player.model_dump(mode="json") for player in players]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
