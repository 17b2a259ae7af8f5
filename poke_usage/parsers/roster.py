"""Loader for tournament roster exports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional

from ..models import TEAM_SIZE, TeamRecord

SLOT_KEYS = tuple(f"mon{index}" for index in range(1, TEAM_SIZE + 1))
PLAYER_KEYS = ("name", "player", "playerName")


def load_roster(path: str | Path) -> List[TeamRecord]:
    """Read a roster JSON file into team records."""

    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{file_path}: invalid roster JSON ({exc})") from exc
    return parse_roster(payload)


def parse_roster(payload: Any) -> List[TeamRecord]:
    """Convert decoded roster JSON into team records.

    Each player may be an object with ``mon1``..``mon6`` keys, an object with
    a ``team`` list, or a bare list of species names. A top-level object with
    a ``players`` key is unwrapped first.
    """

    if isinstance(payload, Mapping) and "players" in payload:
        payload = payload["players"]
    if not isinstance(payload, list):
        raise ValueError("Roster must be a list of players")
    return [_parse_player(item, index) for index, item in enumerate(payload)]


def _parse_player(item: Any, index: int) -> TeamRecord:
    if isinstance(item, list):
        return TeamRecord.from_species(_clean_slots(item, index))
    if not isinstance(item, Mapping):
        raise ValueError(f"Roster entry {index} must be an object or a list")

    player = _player_name(item)
    if "team" in item:
        team = item["team"]
        if not isinstance(team, list):
            raise ValueError(f"Roster entry {index} has a non-list team")
        return TeamRecord.from_species(_clean_slots(team, index), player=player)
    return TeamRecord.from_species(
        _clean_slots([item.get(key) for key in SLOT_KEYS], index),
        player=player,
    )


def _clean_slots(values: List[Any], index: int) -> List[Optional[str]]:
    if len(values) > TEAM_SIZE:
        raise ValueError(f"Roster entry {index} lists {len(values)} Pokemon (max {TEAM_SIZE})")
    slots: List[Optional[str]] = []
    for value in values:
        if value is None:
            slots.append(None)
        elif isinstance(value, str):
            slots.append(value)
        else:
            raise ValueError(f"Roster entry {index} has a non-string slot: {value!r}")
    return slots


def _player_name(item: Mapping[str, Any]) -> Optional[str]:
    for key in PLAYER_KEYS:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
