"""Core dataclasses shared across the usage statistics pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

TEAM_SIZE = 6


@dataclass(frozen=True, slots=True)
class TeamRecord:
    """One participant's roster of up to six species slots."""

    slots: Tuple[Optional[str], ...] = ()
    player: Optional[str] = None

    def __post_init__(self) -> None:
        slots = tuple(self.slots)
        if len(slots) > TEAM_SIZE:
            raise ValueError(f"A team has at most {TEAM_SIZE} slots, got {len(slots)}")
        object.__setattr__(self, "slots", slots)

    @classmethod
    def from_species(cls, species: Iterable[Optional[str]], *, player: Optional[str] = None) -> "TeamRecord":
        return cls(slots=tuple(species), player=player)

    def species(self) -> List[str]:
        """Filled slots, in slot order, duplicates kept."""

        return [mon for mon in self.slots if mon]


@dataclass(frozen=True, slots=True)
class SpeciesEntry:
    """Catalog data for a single species display name."""

    name: str
    dex_number: str
    restricted: bool = False


@dataclass(frozen=True, slots=True)
class UsageStat:
    """Usage of one species across the submitted teams."""

    mon: str
    dex_number: str
    count: int
    percentage_of_teams: float
    percentage_of_all_mons: float


@dataclass(frozen=True, slots=True)
class TournamentMetadata:
    """Sorted usage statistics for one restricted/unrestricted track."""

    usage_stats: Tuple[UsageStat, ...] = field(default_factory=tuple)
    unique_mons: int = 0
    total_teams: int = 0
    total_mons: int = 0
    restricted: bool = False

    def top(self, limit: Optional[int] = None) -> Sequence[UsageStat]:
        if limit is None:
            return self.usage_stats
        if limit < 0:
            raise ValueError("limit must be non-negative")
        return self.usage_stats[:limit]
