"""Species usage statistics for a field of tournament teams."""

from __future__ import annotations

from collections import Counter
from typing import Callable, List, Optional, Sequence

from ..catalog import SpeciesCatalog
from ..models import TeamRecord, TournamentMetadata, UsageStat


def calculate_usage_statistics(
    teams: Sequence[TeamRecord],
    catalog: SpeciesCatalog,
    restricted: bool = False,
    *,
    debug_logger: Optional[Callable[[str], None]] = None,
) -> TournamentMetadata:
    """Calculate usage stats for every species on the submitted teams.

    Only species whose catalog entry matches ``restricted`` are counted;
    species missing from the catalog are ignored. ``percentage_of_teams`` is
    relative to the full team count, ``percentage_of_all_mons`` to the
    filtered slot count. Results are sorted by ``percentage_of_teams``,
    highest first, keeping first-seen order for ties.
    """

    all_mons = [mon for team in teams for mon in team.slots]
    filtered: List[str] = []
    skipped = 0
    for mon in all_mons:
        if not mon:
            continue
        entry = catalog.get(mon)
        if entry is None:
            skipped += 1
            continue
        if entry.restricted == restricted:
            filtered.append(mon)

    if skipped and debug_logger:
        debug_logger(f"Ignored {skipped} slot(s) with species missing from the catalog")

    total_teams = len(teams)
    total_mons = len(filtered)
    # Counter preserves first-seen order, which the stable sort relies on.
    counts = Counter(filtered)

    results = [
        UsageStat(
            mon=mon,
            dex_number=catalog.require(mon).dex_number,
            count=count,
            percentage_of_teams=_percentage(count, total_teams),
            percentage_of_all_mons=_percentage(count, total_mons),
        )
        for mon, count in counts.items()
    ]
    results.sort(key=lambda stat: stat.percentage_of_teams, reverse=True)

    return TournamentMetadata(
        usage_stats=tuple(results),
        unique_mons=len(counts),
        total_teams=total_teams,
        total_mons=total_mons,
        restricted=restricted,
    )


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count / total * 100
