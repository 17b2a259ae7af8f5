"""Service layer wiring usage statistics to overlay outputs."""

from .overlay_publisher import BroadcastSink, FrameRegistry, OverlayPublisher, build_overlay_url

__all__ = [
    "BroadcastSink",
    "FrameRegistry",
    "OverlayPublisher",
    "build_overlay_url",
]
