"""Canonical player and card models shared across ingest, storage and selection."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


DEFAULT_STYLE = "None"


class Card(BaseModel):
    """A player's card with its rating history per position.

    ``ratings_by_position`` keeps insertion order; each sequence is in
    chronological order, oldest first.
    """

    card_id: str = Field(..., min_length=1)
    name: str
    style: str = DEFAULT_STYLE
    ratings_by_position: Dict[str, Tuple[float, ...]] = Field(default_factory=dict)
    image_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def rated_positions(self) -> Tuple[str, ...]:
        """Positions holding at least one rating, in insertion order."""

        return tuple(pos for pos, ratings in self.ratings_by_position.items() if ratings)

    @property
    def total_matches(self) -> int:
        return sum(len(ratings) for ratings in self.ratings_by_position.values())


class Player(BaseModel):
    """A player and the cards they own."""

    player_id: str = Field(..., min_length=1)
    name: str
    cards: Tuple[Card, ...] = ()

    model_config = ConfigDict(frozen=True)

    def get_card(self, card_id: str) -> Optional[Card]:
        for card in self.cards:
            if card.card_id == card_id:
                return card
        return None
