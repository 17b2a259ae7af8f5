"""Parser for Showdown teambuilder exports."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..models import TEAM_SIZE, TeamRecord

TEAM_HEADER = re.compile(r"^===\s*(?:\[(?P<format>[^\]]*)\]\s*)?(?P<name>.*?)\s*===\s*$")
GENDER_MARKERS = {"M", "F"}


def parse_showdown_teams(raw_text: str) -> List[TeamRecord]:
    """Parse one or more exported teams into team records.

    Bulk exports separate teams with ``=== [format] Team Name ===`` lines; a
    paste without such headers is treated as a single team.
    """

    cleaned = raw_text.strip()
    if not cleaned:
        raise ValueError("Team text is empty")

    teams: List[TeamRecord] = []
    for name, body in _split_teams(cleaned):
        species = [_parse_species(chunk) for chunk in _split_entries(body)]
        if len(species) > TEAM_SIZE:
            label = name or f"team {len(teams) + 1}"
            raise ValueError(f"{label} has {len(species)} Pokemon (max {TEAM_SIZE})")
        teams.append(TeamRecord.from_species(species, player=name))
    return teams


def _split_teams(text: str) -> List[Tuple[Optional[str], str]]:
    sections: List[Tuple[Optional[str], List[str]]] = []
    current_name: Optional[str] = None
    current: List[str] = []
    saw_header = False
    for line in text.splitlines():
        match = TEAM_HEADER.match(line.strip())
        if match:
            if saw_header or any(part.strip() for part in current):
                sections.append((current_name, current))
            current_name = match.group("name") or None
            current = []
            saw_header = True
            continue
        current.append(line)
    sections.append((current_name, current))
    return [(name, "\n".join(lines)) for name, lines in sections]


def _split_entries(text: str) -> List[str]:
    return [chunk.strip() for chunk in re.split(r"\n\s*\n", text) if chunk.strip()]


def _parse_species(chunk: str) -> str:
    header = chunk.splitlines()[0].strip()
    if "@" in header:
        header = header.split("@", 1)[0].strip()
    return _infer_species(header)


def _infer_species(name: str) -> str:
    # "Nickname (Species) (M)" -> Species; "Species (F)" -> Species
    groups = [group.strip() for group in re.findall(r"\(([^)]*)\)", name)]
    candidates = [group for group in groups if group and group.upper() not in GENDER_MARKERS]
    if candidates:
        return candidates[0]
    cleaned = re.sub(r"\([^)]*\)", "", name).strip()
    return cleaned or name.strip()
