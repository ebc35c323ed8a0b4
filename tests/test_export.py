import csv
from io import StringIO

from idealxi.export import EXPORT_HEADERS, ideal_team_to_csv
from idealxi.models import Card, FormationSlot, Player
from idealxi.selector import generate_ideal_team


def test_ideal_team_csv_has_starter_and_substitute_rows():
    players = [
        Player(
            player_id="p1",
            name="Keeper",
            cards=[Card(card_id="k1", name="Base", style="Defensive Goalkeeper", ratings_by_position={"PT": [7.0, 8.0]})],
        )
    ]
    slots = [FormationSlot(position="PT", styles=("Defensive Goalkeeper",)), FormationSlot(position="DC")]

    team = generate_ideal_team(players, slots)
    rows = list(csv.DictReader(StringIO(ideal_team_to_csv(team))))

    assert tuple(rows[0].keys()) == EXPORT_HEADERS
    assert len(rows) == 4
    assert [row["role"] for row in rows] == ["starter", "substitute", "starter", "substitute"]

    starter = rows[0]
    assert starter["slot"] == "1"
    assert starter["preferred_styles"] == "Defensive Goalkeeper"
    assert starter["player_id"] == "p1"
    assert starter["average"] == "7.50"
    assert starter["promising"] == "1"
    assert starter["reason"] == "style_match"

    vacant = rows[3]
    assert vacant["player_id"] == ""
    assert vacant["card_id"] == ""
    assert vacant["player_name"] == "Vacant"
    assert vacant["reason"] == "vacant"


def test_real_player_ids_survive_placeholder_like_prefix():
    players = [Player(player_id="placeholder-kid", name="Placeholder Kid", cards=[Card(card_id="pk", name="Base", ratings_by_position={"DC": [8.0]})])]

    team = generate_ideal_team(players, [FormationSlot(position="DC")])
    rows = list(csv.DictReader(StringIO(ideal_team_to_csv(team))))

    assert rows[0]["player_id"] == "placeholder-kid"
    assert rows[0]["card_id"] == "pk"
    assert rows[1]["player_id"] == ""
