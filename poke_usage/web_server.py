"""FastAPI web server exposing usage statistics and overlay publishing."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .analysis import calculate_usage_statistics
from .catalog import CatalogError, SpeciesCatalog
from .clients import OBSClient, OBSClientError
from .config import OverlayConfig, load_config
from .parsers import parse_roster
from .services import FrameRegistry, OverlayPublisher, build_overlay_url

app = FastAPI(
    title="Poke-Usage Web API",
    description="Tournament usage statistics and broadcast overlay URLs",
    version="0.1.0",
)

_config: OverlayConfig = load_config()
_frames = FrameRegistry()

possible_frame_paths = [
    Path(__file__).parent.parent / "static" / "frame.html",
    Path("static") / "frame.html",
    Path.cwd() / "static" / "frame.html",
]


class UsageRequest(BaseModel):
    """Teams plus an optional inline catalog."""

    teams: List[Any]
    restricted: bool = False
    catalog: Optional[Union[Dict[str, Any], List[Any]]] = None


class OverlayUrlRequest(UsageRequest):
    limit: Optional[int] = Field(default=None, ge=0)
    effect: Optional[str] = None


class RefreshRequest(BaseModel):
    teams: List[Any]
    catalog: Optional[Union[Dict[str, Any], List[Any]]] = None
    effect: Optional[str] = None


class UsageResponse(BaseModel):
    result: Dict[str, Any]


class OverlayUrlResponse(BaseModel):
    url: str


class FramesResponse(BaseModel):
    frames: Dict[str, str]


def _resolve_catalog(inline: Optional[Union[Dict[str, Any], List[Any]]]) -> SpeciesCatalog:
    try:
        if inline is not None:
            return SpeciesCatalog.from_mapping(inline)
        if _config.catalog_path:
            return SpeciesCatalog.load(_config.catalog_path)
    except (CatalogError, OSError) as exc:
        raise HTTPException(status_code=400, detail=f"Failed to load catalog: {exc}")
    raise HTTPException(status_code=400, detail="No catalog supplied and POKE_USAGE_CATALOG is not set")


def _resolve_teams(raw: List[Any]):
    try:
        return parse_roster(raw)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Failed to parse teams: {exc}")


def _make_broadcast() -> Optional[OBSClient]:
    if not _config.obs_url:
        return None
    return OBSClient(_config.obs_url, auth_token=_config.obs_token)


@app.get("/frame", response_class=HTMLResponse)
async def frame():
    """Serve the overlay frame page."""
    for frame_path in possible_frame_paths:
        if frame_path.exists():
            return frame_path.read_text(encoding="utf-8")
    return "<html><body><p>Overlay frame not found. Please ensure static/frame.html exists.</p></body></html>"


@app.post("/api/usage", response_model=UsageResponse)
async def usage(request: UsageRequest) -> UsageResponse:
    """Calculate usage statistics for the submitted teams."""
    catalog = _resolve_catalog(request.catalog)
    metadata = calculate_usage_statistics(_resolve_teams(request.teams), catalog, request.restricted)
    return UsageResponse(result=asdict(metadata))


@app.post("/api/overlay_url", response_model=OverlayUrlResponse)
async def overlay_url(request: OverlayUrlRequest) -> OverlayUrlResponse:
    """Build the overlay URL for one usage track without publishing it."""
    catalog = _resolve_catalog(request.catalog)
    metadata = calculate_usage_statistics(_resolve_teams(request.teams), catalog, request.restricted)
    url = build_overlay_url(
        _config.frame_url,
        metadata.usage_stats,
        request.effect if request.effect is not None else _config.effect,
        request.limit,
    )
    return OverlayUrlResponse(url=url)


@app.post("/api/refresh", response_model=FramesResponse)
async def refresh(request: RefreshRequest) -> FramesResponse:
    """Recompute every configured view and push the URLs to their sources."""
    config = _config.with_effect(request.effect) if request.effect is not None else _config
    publisher = OverlayPublisher(
        _resolve_catalog(request.catalog),
        config,
        frames=_frames,
        broadcast=_make_broadcast(),
    )
    try:
        published = publisher.refresh(_resolve_teams(request.teams))
    except OBSClientError as exc:
        raise HTTPException(status_code=502, detail=f"Broadcast update failed: {exc}")
    return FramesResponse(frames=published)


@app.get("/api/frames", response_model=FramesResponse)
async def frames() -> FramesResponse:
    """Return the URL currently assigned to each overlay frame."""
    return FramesResponse(frames=_frames.snapshot())


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[poke-usage-web] Starting web server at http://{host}:{port}")
    print("[poke-usage-web] Press Ctrl+C to stop.")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
