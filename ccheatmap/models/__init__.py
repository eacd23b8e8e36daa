"""Models package - entities and lookup tables."""

from .entities import (
    ModelBreakdown,
    Activity,
    PeakDay,
    PEAK_SENTINEL,
    StatsToggles,
    RenderConfig,
    HeatmapStats,
    WeekdayStats,
)
from .themes import THEMES, MONTHS, DAY_NAMES, resolve_palette

__all__ = [
    "ModelBreakdown",
    "Activity",
    "PeakDay",
    "PEAK_SENTINEL",
    "StatsToggles",
    "RenderConfig",
    "HeatmapStats",
    "WeekdayStats",
    "THEMES",
    "MONTHS",
    "DAY_NAMES",
    "resolve_palette",
]
