import pytest

from idealxi.models import Card, Player
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


def _roster() -> list[Player]:
    return [
        Player(
            player_id="p1",
            name="Lionel",
            cards=[Card(card_id="c1", name="Base", style="Creative Playmaker", ratings_by_position={"MO": [8.0, 9.0]})],
        )
    ]


def test_add_rating_creates_player_and_card():
    roster, player = add_rating([], player_name=" Kylian ", card_name="Epic", position="dc", rating=8.5, style="goal poacher")

    assert len(roster) == 1
    assert roster[0] == player
    assert player.name == "Kylian"
    assert player.cards[0].style == "Goal Poacher"
    assert player.cards[0].ratings_by_position == {"DC": (8.5,)}


def test_add_rating_appends_to_existing_card_by_name():
    original = _roster()

    roster, player = add_rating(original, player_name="lionel", card_name="BASE", position="MO", rating=7.0)

    assert player.player_id == "p1"
    assert player.cards[0].ratings_by_position["MO"] == (8.0, 9.0, 7.0)
    assert len(roster) == 1
    # Inputs are immutable and left untouched.
    assert original[0].cards[0].ratings_by_position["MO"] == (8.0, 9.0)


def test_add_rating_adds_new_card_for_known_player():
    _, player = add_rating(_roster(), player_id="p1", player_name="", card_name="Big Time", position="SD", rating=9.5)

    assert [card.name for card in player.cards] == ["Base", "Big Time"]
    assert player.cards[1].style == "None"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"player_name": "", "card_name": "Base", "position": "MO", "rating": 7.0},
        {"player_name": "Lionel", "card_name": " ", "position": "MO", "rating": 7.0},
        {"player_name": "Lionel", "card_name": "Base", "position": "XX", "rating": 7.0},
        {"player_name": "Lionel", "card_name": "Base", "position": "MO", "rating": 11.0},
        {"player_name": "Lionel", "card_name": "Base", "position": "MO", "rating": 7.0, "style": "Sweeper"},
        {"player_name": "Lionel", "card_name": "Base", "position": "MO", "rating": 7.0, "player_id": "nope"},
    ],
)
def test_add_rating_rejects_bad_input(kwargs):
    with pytest.raises(RosterError):
        add_rating(_roster(), **kwargs)


def test_delete_rating_drops_empty_position():
    player = _roster()[0]

    once = delete_rating(player, card_id="c1", position="MO", index=0)
    assert once.cards[0].ratings_by_position["MO"] == (9.0,)

    twice = delete_rating(once, card_id="c1", position="MO", index=0)
    assert "MO" not in twice.cards[0].ratings_by_position

    with pytest.raises(RosterError):
        delete_rating(twice, card_id="c1", position="MO", index=0)
    with pytest.raises(RosterError):
        delete_rating(player, card_id="c1", position="MO", index=5)


def test_update_and_delete_card():
    player = _roster()[0]

    updated = update_card(player, "c1", name="Icon", style="orchestrator", image_url="https://img/icon.png")
    card = updated.cards[0]
    assert (card.name, card.style, card.image_url) == ("Icon", "Orchestrator", "https://img/icon.png")
    assert update_card(player, "c1") == player

    with pytest.raises(RosterError):
        update_card(player, "c1", name=" ")
    with pytest.raises(RosterError):
        update_card(player, "missing", name="Other")

    assert delete_card(player, "c1").cards == ()
    with pytest.raises(RosterError):
        delete_card(player, "missing")


def test_rename_and_find_player():
    roster = _roster()

    assert find_player(roster, name=" LIONEL ") == roster[0]
    assert find_player(roster, player_id="p1") == roster[0]
    assert find_player(roster, player_id="p2", name="Lionel") is None

    renamed = rename_player(roster[0], " Leo ")
    assert renamed.name == "Leo"
    with pytest.raises(RosterError):
        rename_player(roster[0], "")


def test_delete_position_ratings_keeps_card_with_other_positions():
    player = Player(
        player_id="p1",
        name="Utility",
        cards=[
            Card(card_id="c1", name="Base", ratings_by_position={"MC": [7.0], "MO": [8.0, 8.5]}),
            Card(card_id="c2", name="Special", ratings_by_position={"SD": [9.0]}),
        ],
    )

    cleared = delete_position_ratings(player, "c1", "MO")
    assert cleared.cards[0].ratings_by_position == {"MC": (7.0,)}
    assert len(cleared.cards) == 2

    emptied = delete_position_ratings(cleared, "c2", "SD")
    assert [card.card_id for card in emptied.cards] == ["c1"]

    with pytest.raises(RosterError):
        delete_position_ratings(player, "c1", "DC")
    with pytest.raises(RosterError):
        delete_position_ratings(player, "missing", "MC")
