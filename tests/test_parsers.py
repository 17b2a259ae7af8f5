"""Tests for the roster and Showdown export parsers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from poke_usage.parsers import load_roster, parse_roster, parse_showdown_teams

SAMPLE_TEAM = """Hatterene @ Safety Goggles
Ability: Magic Bounce
Tera Type: Fairy
EVs: 252 HP / 4 SpA / 252 SpD
Sassy Nature
IVs: 0 Atk / 0 Spe
- Trick Room
- Reflect
- Dazzling Gleam
- Heal Pulse

Fungi (Amoonguss) (F) @ Leftovers
Ability: Effect Spore
Tera Type: Steel
- Foul Play
- Clear Smog
- Rage Powder
- Spore

Indeedee-F (F) @ Psychic Seed
Ability: Psychic Surge
- Follow Me
"""

BULK_EXPORT = """=== [gen9vgc2025regg] Trick Room ===

Hatterene @ Safety Goggles
- Trick Room

Ursaluna-Bloodmoon @ Assault Vest
- Blood Moon

=== [gen9vgc2025regg] Sun ===

Koraidon @ Choice Specs
- Flare Blitz
"""


def test_parse_single_paste_extracts_species() -> None:
    teams = parse_showdown_teams(SAMPLE_TEAM)

    assert len(teams) == 1
    assert teams[0].species() == ["Hatterene", "Amoonguss", "Indeedee-F"]
    assert teams[0].player is None


def test_parse_bulk_export_splits_on_headers() -> None:
    teams = parse_showdown_teams(BULK_EXPORT)

    assert [team.player for team in teams] == ["Trick Room", "Sun"]
    assert teams[0].species() == ["Hatterene", "Ursaluna-Bloodmoon"]
    assert teams[1].species() == ["Koraidon"]


def test_parse_showdown_rejects_empty_and_oversized_teams() -> None:
    with pytest.raises(ValueError):
        parse_showdown_teams("   ")
    oversized = "\n\n".join("Pikachu\n- Thunderbolt" for _ in range(7))
    with pytest.raises(ValueError):
        parse_showdown_teams(oversized)


def test_parse_roster_accepts_player_slot_objects() -> None:
    teams = parse_roster(
        [
            {"name": "Ash", "mon1": "Pikachu", "mon2": "", "mon3": "Charizard"},
            {"player": "Gary", "team": ["Eevee", None]},
            ["Lapras"],
        ]
    )

    assert teams[0].player == "Ash"
    assert teams[0].slots == ("Pikachu", "", "Charizard", None, None, None)
    assert teams[0].species() == ["Pikachu", "Charizard"]
    assert teams[1].player == "Gary"
    assert teams[1].species() == ["Eevee"]
    assert teams[2].species() == ["Lapras"]


def test_parse_roster_unwraps_players_key() -> None:
    teams = parse_roster({"players": [{"mon1": "Pikachu"}]})

    assert len(teams) == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"mon1": "Pikachu"},
        ["Pikachu"],
        [{"team": "Pikachu"}],
        [{"team": ["Pikachu"] * 7}],
        [{"mon1": 25}],
    ],
)
def test_parse_roster_rejects_malformed_payloads(payload) -> None:
    with pytest.raises(ValueError):
        parse_roster(payload)


def test_load_roster_reads_json_file(tmp_path: Path) -> None:
    path = tmp_path / "roster.json"
    path.write_text(json.dumps([{"mon1": "Pikachu"}, {"mon1": "Eevee"}]), encoding="utf-8")

    teams = load_roster(path)

    assert [team.species() for team in teams] == [["Pikachu"], ["Eevee"]]
