"""Tournament usage statistics and broadcast overlay utilities."""

from .analysis import calculate_usage_statistics
from .catalog import SpeciesCatalog
from .services import OverlayPublisher, build_overlay_url

__all__ = [
    "OverlayPublisher",
    "SpeciesCatalog",
    "build_overlay_url",
    "calculate_usage_statistics",
]
