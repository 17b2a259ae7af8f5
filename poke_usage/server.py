"""FastMCP server exposing usage statistics tools."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP

from .analysis import calculate_usage_statistics
from .catalog import SpeciesCatalog
from .config import load_config
from .parsers import parse_roster, parse_showdown_teams
from .services import build_overlay_url

app = FastMCP("poke-usage", version="0.1.0")
_config = load_config()


def _catalog(catalog: Optional[Dict[str, Any]]) -> SpeciesCatalog:
    if catalog is not None:
        return SpeciesCatalog.from_mapping(catalog)
    if _config.catalog_path:
        return SpeciesCatalog.load(_config.catalog_path)
    raise ValueError("No catalog given and POKE_USAGE_CATALOG is not set")


@app.tool()
def calculate_usage(
    teams: Annotated[List[Any], "Players as mon1..mon6 objects, team lists, or species lists"],
    restricted: Annotated[bool, "Count only restricted species"] = False,
    catalog: Annotated[Optional[Dict[str, Any]], "Name -> {dex_number, restricted}"] = None,
) -> Dict[str, Any]:
    """Calculate species usage percentages for a set of tournament teams."""

    metadata = calculate_usage_statistics(parse_roster(teams), _catalog(catalog), restricted)
    return asdict(metadata)


@app.tool()
def build_usage_overlay_url(
    teams: Annotated[List[Any], "Players as mon1..mon6 objects, team lists, or species lists"],
    restricted: Annotated[bool, "Count only restricted species"] = False,
    limit: Annotated[Optional[int], "Number of species to include"] = None,
    effect: Annotated[Optional[str], "Overlay icon effect"] = None,
    catalog: Annotated[Optional[Dict[str, Any]], "Name -> {dex_number, restricted}"] = None,
) -> str:
    """Return the overlay frame URL for the given teams."""

    metadata = calculate_usage_statistics(parse_roster(teams), _catalog(catalog), restricted)
    return build_overlay_url(
        _config.frame_url,
        metadata.usage_stats,
        effect if effect is not None else _config.effect,
        limit,
    )


@app.tool()
def parse_showdown_paste(
    team_text: Annotated[str, "Showdown teambuilder export (one or more teams)"],
) -> List[Dict[str, Any]]:
    """Parse a Showdown export into team records."""

    return [asdict(team) for team in parse_showdown_teams(team_text)]


def run() -> None:
    """Entry point for `python -m poke_usage.server` or console script."""

    print("[poke-usage] Starting MCP server. Press Ctrl+C to stop.")
    app.run()


if __name__ == "__main__":
    run()
