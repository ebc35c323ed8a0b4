from pathlib import Path

import pytest

from idealxi.config import get_preset
from idealxi.models import Card, Formation, Player
from idealxi.persistence import RosterStore


def _player(player_id: str, name: str, rating: float = 7.0) -> Player:
    return Player(
        player_id=player_id,
        name=name,
        cards=[Card(card_id=f"{player_id}-c", name="Base", ratings_by_position={"DC": [rating]})],
    )


def test_players_round_trip_in_creation_order(tmp_path: Path):
    store = RosterStore(tmp_path / "roster.sqlite")
    store.save_players([_player("b", "Bravo"), _player("a", "Alpha")])

    assert [player.player_id for player in store.list_players()] == ["b", "a"]

    updated = _player("b", "Bravo", rating=9.0)
    store.save_player(updated)
    # Updating keeps the original position in the pool.
    assert [player.player_id for player in store.list_players()] == ["b", "a"]
    assert store.get_player("b") == updated

    assert store.delete_player("b") is True
    assert store.delete_player("b") is False
    assert store.get_player("b") is None


def test_formation_match_results(tmp_path: Path):
    store = RosterStore(tmp_path / "roster.sqlite")
    preset = get_preset("4-4-2")
    store.save_formation(Formation(formation_id="f1", name="Classic", slots=preset.slots()))

    store.add_match_result("f1", goals_for=2, goals_against=1)
    formation = store.add_match_result("f1", goals_for=0, goals_against=0)

    assert [(m.goals_for, m.goals_against) for m in formation.matches] == [(2, 1), (0, 0)]
    assert store.get_formation("f1") == formation
    assert [f.formation_id for f in store.list_formations()] == ["f1"]

    with pytest.raises(KeyError):
        store.add_match_result("missing", goals_for=1, goals_against=0)

    assert store.delete_formation("f1") is True
    assert store.list_formations() == []


def test_db_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "nested" / "env.sqlite"
    monkeypatch.setenv("IDEALXI_DB_PATH", str(db_path))

    store = RosterStore()
    store.save_player(_player("p1", "One"))

    assert db_path.exists()
    assert RosterStore(db_path).get_player("p1") is not None
