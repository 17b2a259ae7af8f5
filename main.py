"""Command-line interface for tournament usage statistics and overlays."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path

from poke_usage.analysis import calculate_usage_statistics
from poke_usage.catalog import CatalogError, SpeciesCatalog, build_catalog
from poke_usage.clients import OBSClient, OBSClientError, PokeAPIClient, PokeAPIClientError
from poke_usage.config import load_config
from poke_usage.models import TournamentMetadata
from poke_usage.parsers import load_roster, parse_roster, parse_showdown_teams
from poke_usage.services import OverlayPublisher, build_overlay_url


def _read_teams(path: str):
    if path == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No roster provided on stdin.")
        return _parse_teams_text(data)
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    try:
        if file_path.suffix.lower() == ".json":
            return load_roster(file_path)
        return parse_showdown_teams(file_path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise SystemExit(f"Could not read teams from {file_path}: {exc}")


def _parse_teams_text(text: str):
    try:
        if text.lstrip().startswith(("[", "{")):
            return parse_roster(json.loads(text))
        return parse_showdown_teams(text)
    except ValueError as exc:
        raise SystemExit(f"Could not read teams from stdin: {exc}")


def _humanize_metadata(metadata: TournamentMetadata, limit: int | None = None) -> str:
    label = "Restricted" if metadata.restricted else "Non-restricted"
    lines: list[str] = [
        f"{label} usage: {metadata.unique_mons} species across {metadata.total_teams} teams"
        f" ({metadata.total_mons} slots counted)",
        "",
    ]
    for rank, stat in enumerate(metadata.top(limit), start=1):
        lines.append(
            f"  {rank:>3}. {stat.mon} (#{stat.dex_number})"
            f"  {stat.percentage_of_teams:6.2f}% of teams"
            f"  {stat.percentage_of_all_mons:6.2f}% of all Pokémon"
        )
    if not metadata.usage_stats:
        lines.append("  No species matched.")
    return "\n".join(lines).rstrip()


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Calculate tournament Pokémon usage statistics")
    parser.add_argument(
        "roster",
        help="Roster JSON, Showdown export text, or '-' to read from stdin",
    )
    parser.add_argument(
        "--catalog",
        help="Species catalog JSON (default: $POKE_USAGE_CATALOG)",
    )
    parser.add_argument(
        "--build-catalog",
        action="store_true",
        help="Resolve species on the roster through PokeAPI instead of a catalog file",
    )
    parser.add_argument(
        "--save-catalog",
        help="Write the catalog used for this run to the given path",
    )
    parser.add_argument(
        "--config",
        help="Overlay config JSON (default: $POKE_USAGE_CONFIG)",
    )
    parser.add_argument(
        "--restricted",
        action="store_true",
        help="Report restricted species instead of non-restricted ones",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Only show the top N species",
    )
    parser.add_argument(
        "--effect",
        help="Overlay icon effect (default from config)",
    )
    parser.add_argument(
        "--frame-url",
        help="Overlay frame URL (default from config)",
    )
    parser.add_argument(
        "--url",
        action="store_true",
        help="Print the overlay URL instead of the usage table",
    )
    parser.add_argument(
        "--publish",
        action="store_true",
        help="Publish every configured view to the overlay frames and OBS",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the usage statistics as JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be non-negative")

    _debug_print(args.debug, f"Arguments parsed: {args}")
    try:
        config = load_config(args.config)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}")
    if args.effect is not None:
        config = config.with_effect(args.effect)
    if args.frame_url:
        config = replace(config, frame_url=args.frame_url)

    teams = _read_teams(args.roster)
    _debug_print(args.debug, f"Loaded {len(teams)} teams")
    catalog = _load_catalog(args, config.catalog_path, teams)
    _debug_print(args.debug, f"Catalog holds {len(catalog)} species")
    if args.save_catalog:
        catalog.dump(args.save_catalog)
        _debug_print(args.debug, f"Catalog written to {args.save_catalog}")

    def debug_logger(message: str) -> None:
        _debug_print(args.debug, message)

    if args.publish:
        broadcast = OBSClient(config.obs_url, auth_token=config.obs_token) if config.obs_url else None
        _debug_print(args.debug, f"Broadcast client available: {bool(broadcast)}")
        publisher = OverlayPublisher(catalog, config, broadcast=broadcast, debug_logger=debug_logger)
        try:
            published = publisher.refresh(teams)
        except OBSClientError as exc:
            raise SystemExit(f"Broadcast update failed: {exc}")
        if args.json:
            json.dump(published, sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            for name, url in published.items():
                print(f"{name}: {url}")
        return 0

    metadata = calculate_usage_statistics(teams, catalog, args.restricted, debug_logger=debug_logger)
    if args.url:
        print(build_overlay_url(config.frame_url, metadata.usage_stats, config.effect, args.limit))
    elif args.json:
        payload = asdict(metadata)
        payload["usage_stats"] = [asdict(stat) for stat in metadata.top(args.limit)]
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(_humanize_metadata(metadata, args.limit))
    return 0


def _load_catalog(args: argparse.Namespace, default_path: str | None, teams) -> SpeciesCatalog:
    if args.build_catalog:
        names = [mon for team in teams for mon in team.species()]
        try:
            return build_catalog(
                names,
                PokeAPIClient(),
                debug_logger=lambda msg: _debug_print(args.debug, msg),
            )
        except PokeAPIClientError as exc:
            raise SystemExit(f"PokeAPI lookup failed: {exc}")
    path = args.catalog or default_path
    if not path:
        raise SystemExit("No species catalog given; pass --catalog, --build-catalog or set POKE_USAGE_CATALOG.")
    try:
        return SpeciesCatalog.load(path)
    except FileNotFoundError:
        raise SystemExit(f"Catalog not found: {path}")
    except CatalogError as exc:
        raise SystemExit(f"Invalid catalog: {exc}")
    except OSError as exc:
        raise SystemExit(f"Could not read catalog {path}: {exc}")


if __name__ == "__main__":
    raise SystemExit(main())
