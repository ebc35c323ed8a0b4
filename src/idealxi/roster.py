"""Pure edit operations over immutable players and cards.

Every function returns new model instances; inputs are never modified.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
from uuid import uuid4

from idealxi.config import normalize_position, normalize_style, validate_rating
from idealxi.models import Card, Player


class RosterError(ValueError):
    """Raised when a roster edit cannot be applied."""


def _new_id() -> str:
    return uuid4().hex


def find_player(
    players: Sequence[Player],
    *,
    player_id: Optional[str] = None,
    name: Optional[str] = None,
) -> Optional[Player]:
    if player_id:
        for player in players:
            if player.player_id == player_id:
                return player
        return None
    if name:
        key = name.strip().lower()
        for player in players:
            if player.name.strip().lower() == key:
                return player
    return None


def _find_card_by_name(player: Player, card_name: str) -> Optional[Card]:
    key = card_name.strip().lower()
    for card in player.cards:
        if card.name.strip().lower() == key:
            return card
    return None


def _replace_card(player: Player, card: Card) -> Player:
    cards = tuple(card if existing.card_id == card.card_id else existing for existing in player.cards)
    return player.model_copy(update={"cards": cards})


def _require_card(player: Player, card_id: str) -> Card:
    card = player.get_card(card_id)
    if card is None:
        raise RosterError(f"Player {player.name!r} has no card {card_id!r}")
    return card


def add_rating(
    players: Sequence[Player],
    *,
    player_name: str,
    card_name: str,
    position: str,
    rating: float,
    style: str = "None",
    player_id: Optional[str] = None,
) -> Tuple[List[Player], Player]:
    """Record one match rating, creating the player and card when needed.

    Returns the updated roster and the updated player.
    """

    if not player_name.strip() and not player_id:
        raise RosterError("player_name is required")
    if not card_name.strip():
        raise RosterError("card_name is required")
    try:
        position_code = normalize_position(position)
        style_name = normalize_style(style)
        value = validate_rating(rating)
    except ValueError as exc:
        raise RosterError(str(exc)) from exc

    existing = find_player(players, player_id=player_id, name=player_name)
    if existing is None and player_id:
        raise RosterError(f"Unknown player {player_id!r}")
    player = existing or Player(player_id=_new_id(), name=player_name.strip())

    card = _find_card_by_name(player, card_name)
    if card is None:
        card = Card(card_id=_new_id(), name=card_name.strip(), style=style_name)
        player = player.model_copy(update={"cards": player.cards + (card,)})

    ratings = dict(card.ratings_by_position)
    ratings[position_code] = tuple(ratings.get(position_code, ())) + (value,)
    player = _replace_card(player, card.model_copy(update={"ratings_by_position": ratings}))

    if existing is None:
        roster = list(players) + [player]
    else:
        roster = [player if p.player_id == existing.player_id else p for p in players]
    return roster, player


def delete_rating(player: Player, *, card_id: str, position: str, index: int) -> Player:
    """Remove one rating; a position left without ratings is dropped."""

    card = _require_card(player, card_id)
    history = card.ratings_by_position.get(position)
    if not history:
        raise RosterError(f"Card {card.name!r} has no ratings at {position}")
    if not 0 <= index < len(history):
        raise RosterError(f"Rating index {index} out of range for {position} ({len(history)} ratings)")

    remaining = history[:index] + history[index + 1 :]
    ratings = dict(card.ratings_by_position)
    if remaining:
        ratings[position] = remaining
    else:
        del ratings[position]
    return _replace_card(player, card.model_copy(update={"ratings_by_position": ratings}))


def delete_position_ratings(player: Player, card_id: str, position: str) -> Player:
    """Clear a card's ratings at one position; a card left with none is removed."""

    card = _require_card(player, card_id)
    if not card.ratings_by_position.get(position):
        raise RosterError(f"Card {card.name!r} has no ratings at {position}")

    ratings = {pos: values for pos, values in card.ratings_by_position.items() if pos != position}
    if not any(ratings.values()):
        return delete_card(player, card_id)
    return _replace_card(player, card.model_copy(update={"ratings_by_position": ratings}))


def update_card(
    player: Player,
    card_id: str,
    *,
    name: Optional[str] = None,
    style: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Player:
    card = _require_card(player, card_id)
    update: dict[str, object] = {}
    if name is not None:
        if not name.strip():
            raise RosterError("Card name cannot be blank")
        update["name"] = name.strip()
    if style is not None:
        try:
            update["style"] = normalize_style(style)
        except ValueError as exc:
            raise RosterError(str(exc)) from exc
    if image_url is not None:
        update["image_url"] = image_url or None
    if not update:
        return player
    return _replace_card(player, card.model_copy(update=update))


def delete_card(player: Player, card_id: str) -> Player:
    _require_card(player, card_id)
    return player.model_copy(update={"cards": tuple(card for card in player.cards if card.card_id != card_id)})


def rename_player(player: Player, name: str) -> Player:
    if not name.strip():
        raise RosterError("Player name cannot be blank")
    return player.model_copy(update={"name": name.strip()})
