"""Input adapters that normalize rating ledgers and formation documents."""

from .ratings import (
    ImportReport,
    RatingRow,
    dump_players_json,
    formation_from_payload,
    load_formation_json,
    load_players_from_csv,
    load_players_json,
    load_rating_csv,
    rows_to_players,
)

__all__ = [
    "ImportReport",
    "RatingRow",
    "dump_players_json",
    "formation_from_payload",
    "load_formation_json",
    "load_players_from_csv",
    "load_players_json",
    "load_rating_csv",
    "rows_to_players",
]
