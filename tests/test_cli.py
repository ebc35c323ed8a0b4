import json
from pathlib import Path

import pytest

from idealxi.cli import main
from idealxi.config_loader import SelectionProfile, default_recent_window


LEDGER = """player,card,style,position,rating
Alisson,Base,Defensive Goalkeeper,PT,7.5
Virgil,Base,Build Up,DFC,8.0
Mo,Base,Prolific Winger,EXD,8.5
Mo,Base,,DC,7.0
Darwin,Base,Goal Poacher,DC,6.5
"""


@pytest.fixture
def ledger(tmp_path: Path) -> Path:
    path = tmp_path / "ratings.csv"
    path.write_text(LEDGER, encoding="utf-8")
    return path


def test_team_command_writes_csv_and_profile(ledger: Path, tmp_path: Path, capsys):
    output = tmp_path / "team.csv"
    profile_path = tmp_path / "profile.json"

    code = main(
        [
            "team",
            str(ledger),
            "--preset",
            "4-3-3",
            "--discard",
            "darwin:base",
            "--recent-window",
            "4",
            "--output",
            str(output),
            "--save-profile",
            str(profile_path),
        ]
    )

    assert code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1 + 22
    assert "darwin" not in output.read_text(encoding="utf-8")
    assert json.loads(profile_path.read_text(encoding="utf-8")) == {
        "discarded_card_ids": ["darwin:base"],
        "recent_window": 4,
    }
    out = capsys.readouterr().out
    assert "Loaded 5/5 ratings for 4 players" in out
    assert "Vacant assignments:" in out


def test_team_command_with_formation_file(ledger: Path, tmp_path: Path, capsys):
    formation = tmp_path / "custom.json"
    positions = ["PT", "LI", "DFC", "DFC", "LD", "MC", "MC", "MC", "EXI", "DC", "EXD"]
    slots = [{"position": position} for position in positions]
    slots[9]["styles"] = ["Goal Poacher"]
    formation.write_text(json.dumps({"name": "Custom", "slots": slots}), encoding="utf-8")

    assert main(["team", str(ledger), "--formation", str(formation)]) == 0

    out = capsys.readouterr().out
    assert "10,DC,Goal Poacher,starter,darwin,Darwin" in out


def test_load_profile_merges_discards(ledger: Path, tmp_path: Path):
    profile_path = tmp_path / "profile.json"
    SelectionProfile(discarded_card_ids=["mo:base"], recent_window=2).save(profile_path)
    output = tmp_path / "team.csv"

    main(["team", str(ledger), "--preset", "4-4-2", "--load-profile", str(profile_path), "--output", str(output)])

    assert "mo:base" not in output.read_text(encoding="utf-8")


def test_stats_command_filters_by_player(ledger: Path, capsys):
    assert main(["stats", str(ledger), "--player", "mo"]) == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Mo"
    assert "EXD  8.5 (1 matches)" in out
    assert "Virgil" not in out

    with pytest.raises(SystemExit):
        main(["stats", str(ledger), "--player", "nobody"])


def test_recent_window_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("IDEALXI_RECENT_WINDOW", "5")
    assert default_recent_window() == 5
    monkeypatch.setenv("IDEALXI_RECENT_WINDOW", "0")
    assert default_recent_window() == 1
    monkeypatch.setenv("IDEALXI_RECENT_WINDOW", "abc")
    assert default_recent_window() == 3


def test_stats_command_ranks_position(ledger: Path, capsys):
    assert main(["stats", str(ledger), "--position", "dc"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "DC: 2 cards"
    assert lines[1].startswith("   1. Mo / Base")
    assert lines[2].startswith("   2. Darwin / Base [Goal Poacher]")

    assert main(["stats", str(ledger), "--position", "DC", "--player", "dar"]) == 0
    assert "Mo /" not in capsys.readouterr().out

    with pytest.raises(SystemExit):
        main(["stats", str(ledger), "--position", "XX"])


def test_team_command_rejects_malformed_formation(ledger: Path, tmp_path: Path):
    formation = tmp_path / "broken.json"
    formation.write_text(json.dumps({"name": "Broken", "slots": ["PT"] * 11}), encoding="utf-8")

    with pytest.raises(SystemExit, match="Slot 1"):
        main(["team", str(ledger), "--formation", str(formation)])
