"""Publishes usage statistics to overlay frames and broadcast sources."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..analysis import calculate_usage_statistics
from ..catalog import SpeciesCatalog
from ..config import OverlayConfig, UsageView
from ..models import TeamRecord, TournamentMetadata, UsageStat


class BroadcastSink(Protocol):
    def set_browser_source_url(self, source_name: str, url: str) -> None: ...


class FrameRegistry:
    """Holds the URL currently assigned to each local overlay frame."""

    def __init__(self) -> None:
        self._frames: Dict[str, str] = {}

    def show(self, frame: str, url: str) -> None:
        self._frames[frame] = url

    def get(self, frame: str) -> Optional[str]:
        return self._frames.get(frame)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._frames)


def build_overlay_url(
    base_url: str,
    stats: Sequence[UsageStat],
    effect: str,
    limit: Optional[int] = None,
) -> str:
    """Encode the top ``limit`` stats as ``<dex>=<percent>`` query parameters.

    A repeated dex number overwrites the earlier value but keeps its
    position. Other parameters already on ``base_url`` are left as they
    are. ``effect`` is always the final parameter.
    """

    if limit is not None and limit < 0:
        raise ValueError("limit must be non-negative")
    kept = stats if limit is None else stats[:limit]

    parts = urlsplit(base_url)
    params: List[Tuple[str, str]] = parse_qsl(parts.query, keep_blank_values=True)
    for stat in kept:
        _set_param(params, str(stat.dex_number), _format_percentage(stat.percentage_of_teams))
    params = [(key, value) for key, value in params if key != "effect"]
    params.append(("effect", effect))
    return urlunsplit(parts._replace(query=urlencode(params)))


def _format_percentage(value: float) -> str:
    # Half-cent ties round up, e.g. 5/32 teams -> "15.63".
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _set_param(params: List[Tuple[str, str]], key: str, value: str) -> None:
    """Replace the first ``key`` in place and drop later repeats, or append."""

    indexes = [index for index, (name, _) in enumerate(params) if name == key]
    if not indexes:
        params.append((key, value))
        return
    params[indexes[0]] = (key, value)
    for index in reversed(indexes[1:]):
        del params[index]


class OverlayPublisher:
    """Computes each configured usage view and pushes its overlay URL."""

    def __init__(
        self,
        catalog: SpeciesCatalog,
        config: OverlayConfig,
        *,
        frames: Optional[FrameRegistry] = None,
        broadcast: Optional[BroadcastSink] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.catalog = catalog
        self.config = config
        self.frames = frames or FrameRegistry()
        self.broadcast = broadcast
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def compute(self, teams: Sequence[TeamRecord], view: UsageView) -> TournamentMetadata:
        return calculate_usage_statistics(
            teams,
            self.catalog,
            view.restricted,
            debug_logger=self._debug_logger,
        )

    def build_url(self, metadata: TournamentMetadata, view: UsageView, *, effect: Optional[str] = None) -> str:
        return build_overlay_url(
            self.config.frame_url,
            metadata.usage_stats,
            effect if effect is not None else self.config.effect,
            view.limit,
        )

    def publish_view(self, teams: Sequence[TeamRecord], view: UsageView) -> str:
        metadata = self.compute(teams, view)
        url = self.build_url(metadata, view)
        self._debug(
            f"View {view.name}: {metadata.unique_mons} species over {metadata.total_teams} teams -> {url}"
        )
        self.frames.show(view.name, url)
        if self.broadcast is not None:
            self._debug(f"Updating broadcast source {view.source_name!r}")
            self.broadcast.set_browser_source_url(view.source_name, url)
        return url

    def refresh(
        self,
        teams: Sequence[TeamRecord],
        views: Optional[Iterable[UsageView]] = None,
    ) -> Dict[str, str]:
        """Publish every view (all configured ones by default) in order."""

        published: List[Tuple[str, str]] = []
        for view in views if views is not None else self.config.views:
            published.append((view.name, self.publish_view(teams, view)))
        return dict(published)
