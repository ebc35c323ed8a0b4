import json
from pathlib import Path

import pytest

from idealxi.ingest import (
    RatingRow,
    dump_players_json,
    formation_from_payload,
    load_formation_json,
    load_players_from_csv,
    load_players_json,
    rows_to_players,
)


LEDGER = """player,card,style,position,rating
Lionel,Base,Creative Playmaker,MO,8.0
Lionel,Base,,MO,"9,5"
Lionel,Base,Orchestrator,SD,7.0
Kylian,Epic,Goal Poacher,DC,8.5
Kylian,Epic,Goal Poacher,XX,8.5
Kylian,Epic,Goal Poacher,DC,12
,Epic,Goal Poacher,DC,6.0
Erling,Base,target man,DC,seven
"""


def _row(line_number: int = 2, **kwargs) -> RatingRow:
    mapping = {
        "player": "player",
        "card": "card",
        "style": "style",
        "position": "position",
        "rating": "rating",
    }
    return RatingRow.from_mapping(kwargs, mapping, line_number=line_number)


def _write(tmp_path: Path, text: str, name: str = "ratings.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_players_from_csv_groups_rows(tmp_path: Path):
    players, report = load_players_from_csv(_write(tmp_path, LEDGER))

    assert [player.name for player in players] == ["Lionel", "Kylian"]
    lionel = players[0]
    assert lionel.player_id == "lionel"
    assert len(lionel.cards) == 1
    card = lionel.cards[0]
    assert card.card_id == "lionel:base"
    assert card.style == "Creative Playmaker"
    assert card.ratings_by_position == {"MO": (8.0, 9.5), "SD": (7.0,)}

    assert report.total_rows == 8
    assert report.imported_ratings == 4
    assert report.players == 2
    assert report.cards == 2
    assert [entry.split(":")[0] for entry in report.skipped_rows] == ["line 6", "line 7", "line 8", "line 9"]


def test_custom_mapping_and_explicit_ids(tmp_path: Path):
    text = "ID,Name,CardID,Card Name,Pos,Score\n9,Vini,v-1,Base,exi,7.5\n9,Vinicius,v-1,Base,EXI,8\n"
    mapping = {
        "player_id": "ID",
        "player": "Name",
        "card_id": "CardID",
        "card": "Card Name",
        "position": "Pos",
        "rating": "Score",
    }

    players, report = load_players_from_csv(_write(tmp_path, text), mapping=mapping)

    assert report.imported_ratings == 2
    assert len(players) == 1
    assert players[0].player_id == "9"
    # First-seen name wins.
    assert players[0].name == "Vini"
    assert players[0].cards[0].card_id == "v-1"
    assert players[0].cards[0].ratings_by_position["EXI"] == (7.5, 8.0)


def test_rows_to_players_skips_blank_rating():
    rows = [_row(player="A", card="Base", position="DC", rating="")]

    players, report = rows_to_players(rows)

    assert players == []
    assert report.skipped_rows == ["line 2: rating is empty"]


def _formation_payload(**overrides):
    payload = {
        "name": "Wing Play",
        "play_style": "out wide",
        "slots": [{"position": position} for position in ("PT", "LI", "DFC", "DFC", "LD", "MCD", "MC", "MC", "EXI", "DC", "EXD")],
    }
    payload.update(overrides)
    return payload


def test_formation_from_payload_normalizes():
    formation = formation_from_payload(_formation_payload(), formation_id="f1")

    assert formation.formation_id == "f1"
    assert formation.play_style == "Out Wide"
    assert len(formation.slots) == 11


def test_formation_from_payload_rejects_bad_documents():
    with pytest.raises(ValueError):
        formation_from_payload(_formation_payload(slots="PT"))
    with pytest.raises(ValueError):
        formation_from_payload(_formation_payload(play_style="Tiki Taka"))
    with pytest.raises(ValueError, match="exactly 11"):
        formation_from_payload(_formation_payload(slots=[{"position": "PT"}]))


def test_load_formation_json_defaults_id_to_file_stem(tmp_path: Path):
    path = tmp_path / "wing-play.json"
    path.write_text(json.dumps(_formation_payload()), encoding="utf-8")

    formation = load_formation_json(path)

    assert formation.formation_id == "wing-play"
    assert formation.name == "Wing Play"


def test_players_json_round_trip(tmp_path: Path):
    players, _ = load_players_from_csv(_write(tmp_path, LEDGER))
    path = tmp_path / "players.json"

    dump_players_json(players, path)

    assert load_players_json(path) == players


def test_load_players_json_requires_list(tmp_path: Path):
    path = tmp_path / "players.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError):
        load_players_json(path)
