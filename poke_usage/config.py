"""Runtime configuration for usage overlays."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

# Load default .env first, then overlay .env.local so user-specific values win.
load_dotenv()
load_dotenv(".env.local", override=True)

DEFAULT_FRAME_URL = "http://127.0.0.1:8000/frame"
DEFAULT_EFFECT = "none"


@dataclass(frozen=True, slots=True)
class UsageView:
    """One published usage track (restricted or not) and where it goes."""

    name: str
    restricted: bool
    limit: Optional[int]
    source_name: str

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"View {self.name!r}: limit must be non-negative")


@dataclass(frozen=True, slots=True)
class OverlayConfig:
    frame_url: str = DEFAULT_FRAME_URL
    effect: str = DEFAULT_EFFECT
    views: Tuple[UsageView, ...] = field(
        default_factory=lambda: (
            UsageView(name="non_restricted", restricted=False, limit=6, source_name="Usage"),
            UsageView(name="restricted", restricted=True, limit=4, source_name="Restricted Usage"),
        )
    )
    catalog_path: Optional[str] = None
    obs_url: Optional[str] = None
    obs_token: Optional[str] = None

    def view(self, name: str) -> UsageView:
        for view in self.views:
            if view.name == name:
                return view
        raise KeyError(name)

    def with_effect(self, effect: str) -> "OverlayConfig":
        return replace(self, effect=effect)


def load_config(
    path: str | Path | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> OverlayConfig:
    """Build the overlay config from environment variables and an optional JSON file.

    Values in the JSON file win over the environment. The file may set
    ``frame_url``, ``effect``, ``catalog_path``, ``obs_url``, ``obs_token`` and
    a ``views`` list of ``{name, restricted, limit, source_name}`` objects.
    """

    env = os.environ if environ is None else environ
    config = OverlayConfig(
        frame_url=env.get("POKE_USAGE_FRAME_URL", DEFAULT_FRAME_URL),
        effect=env.get("POKE_USAGE_EFFECT", DEFAULT_EFFECT),
        views=(
            UsageView(
                name="non_restricted",
                restricted=False,
                limit=_parse_limit(env.get("POKE_USAGE_LIMIT"), 6),
                source_name=env.get("POKE_USAGE_SOURCE", "Usage"),
            ),
            UsageView(
                name="restricted",
                restricted=True,
                limit=_parse_limit(env.get("POKE_USAGE_RESTRICTED_LIMIT"), 4),
                source_name=env.get("POKE_USAGE_RESTRICTED_SOURCE", "Restricted Usage"),
            ),
        ),
        catalog_path=env.get("POKE_USAGE_CATALOG") or None,
        obs_url=env.get("OBS_HTTP_URL") or None,
        obs_token=env.get("OBS_HTTP_TOKEN") or None,
    )

    path = path or env.get("POKE_USAGE_CONFIG")
    if path:
        config = _apply_file(config, Path(path))
    return config


def _apply_file(config: OverlayConfig, path: Path) -> OverlayConfig:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid config JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a JSON object")

    overrides: Dict[str, Any] = {}
    for key in ("frame_url", "effect", "catalog_path", "obs_url", "obs_token"):
        if key in data:
            overrides[key] = data[key]
    if "views" in data:
        overrides["views"] = tuple(_parse_view(item) for item in data["views"])
    return replace(config, **overrides)


def _parse_view(item: Any) -> UsageView:
    if not isinstance(item, dict) or not item.get("name"):
        raise ValueError(f"View entry must be an object with a name: {item!r}")
    restricted = item.get("restricted", False)
    if not isinstance(restricted, bool):
        raise ValueError(f"View {item['name']!r} has a non-boolean restricted flag: {restricted!r}")
    limit = item.get("limit")
    return UsageView(
        name=str(item["name"]),
        restricted=restricted,
        limit=None if limit is None else _parse_limit(limit, 0),
        source_name=str(item.get("source_name") or item["name"]),
    )


def _parse_limit(raw: Any, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Limit must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"Limit must be non-negative, got {value}")
    return value
