"""Shared dataclasses for tournament usage statistics."""

from .usage import TEAM_SIZE, SpeciesEntry, TeamRecord, TournamentMetadata, UsageStat

__all__ = [
    "TEAM_SIZE",
    "SpeciesEntry",
    "TeamRecord",
    "TournamentMetadata",
    "UsageStat",
]
