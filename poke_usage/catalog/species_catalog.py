"""Read-only species catalog mapping display names to dex data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional

from ..models import SpeciesEntry


class CatalogError(ValueError):
    """Raised when catalog data cannot be interpreted."""


class SpeciesNotFoundError(KeyError):
    """Raised by strict lookups for a species the catalog does not list."""


class SpeciesCatalog:
    """Exact-name lookup table of species entries.

    Names are matched exactly as they appear in team records; no slugging or
    case folding is applied, so "Urshifu-Rapid-Strike" and "Urshifu" are
    distinct entries.
    """

    def __init__(self, entries: Iterable[SpeciesEntry] = ()) -> None:
        self._entries: Dict[str, SpeciesEntry] = {}
        for entry in entries:
            self._entries[entry.name] = entry

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_entries(cls, entries: Iterable[SpeciesEntry]) -> "SpeciesCatalog":
        return cls(entries)

    @classmethod
    def from_mapping(cls, payload: Any) -> "SpeciesCatalog":
        """Build a catalog from decoded JSON.

        Accepts either ``{"Pikachu": {"dex_number": 25, "restricted": false}}``
        or ``[{"name": "Pikachu", "dex_number": 25}]``. ``dexNumber`` is
        accepted in place of ``dex_number``.
        """

        if isinstance(payload, Mapping):
            items = [(name, value) for name, value in payload.items()]
        elif isinstance(payload, list):
            items = []
            for value in payload:
                if not isinstance(value, Mapping) or not value.get("name"):
                    raise CatalogError(f"Catalog entry is missing a name: {value!r}")
                items.append((value["name"], value))
        else:
            raise CatalogError("Catalog must be a JSON object or list")
        return cls(_parse_entry(str(name), value) for name, value in items)

    @classmethod
    def load(cls, path: str | Path) -> "SpeciesCatalog":
        file_path = Path(path)
        try:
            payload = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{file_path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise CatalogError(f"{file_path}: not UTF-8 text ({exc})") from exc
        return cls.from_mapping(payload)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get(self, name: str) -> Optional[SpeciesEntry]:
        return self._entries.get(name)

    def require(self, name: str) -> SpeciesEntry:
        entry = self._entries.get(name)
        if entry is None:
            raise SpeciesNotFoundError(name)
        return entry

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SpeciesEntry]:
        return iter(self._entries.values())

    def to_mapping(self) -> Dict[str, Dict[str, Any]]:
        return {
            entry.name: {"dex_number": entry.dex_number, "restricted": entry.restricted}
            for entry in self._entries.values()
        }

    def dump(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_mapping(), indent=2), encoding="utf-8")


def build_catalog(
    names: Iterable[str],
    pokeapi_client,
    *,
    restricted_names: Optional[Iterable[str]] = None,
    debug_logger: Optional[Callable[[str], None]] = None,
) -> SpeciesCatalog:
    """Resolve species through PokeAPI and collect them into a catalog.

    Species PokeAPI does not know are left out. When ``restricted_names`` is
    given it replaces PokeAPI's legendary flag as the restricted marker.
    """

    restricted_set = set(restricted_names) if restricted_names is not None else None
    entries = []
    seen: set[str] = set()
    for name in names:
        if not name or name in seen:
            continue
        seen.add(name)
        entry = pokeapi_client.get_species_entry(name)
        if entry is None:
            if debug_logger:
                debug_logger(f"PokeAPI has no species named {name!r}; skipping")
            continue
        if restricted_set is not None:
            entry = SpeciesEntry(
                name=entry.name,
                dex_number=entry.dex_number,
                restricted=name in restricted_set,
            )
        entries.append(entry)
    return SpeciesCatalog(entries)


def _parse_entry(name: str, value: Any) -> SpeciesEntry:
    if not isinstance(value, Mapping):
        raise CatalogError(f"Catalog entry for {name!r} must be an object")
    dex = value.get("dex_number", value.get("dexNumber"))
    if dex is None or str(dex).strip() == "":
        raise CatalogError(f"Catalog entry for {name!r} has no dex number")
    restricted = value.get("restricted", False)
    if not isinstance(restricted, bool):
        raise CatalogError(f"Catalog entry for {name!r} has a non-boolean restricted flag")
    return SpeciesEntry(name=name, dex_number=str(dex).strip(), restricted=restricted)
