"""Usage analysis for tournament rosters."""

from .usage import calculate_usage_statistics

__all__ = ["calculate_usage_statistics"]
