"""
Data structures (entities) for ccheatmap.

Uses dataclasses for clean, typed data structures.
Records are frozen: a render call never mutates its input series.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Union


@dataclass(frozen=True)
class ModelBreakdown:
    """Cost contribution of one model on a given day."""
    label: str
    cost: float = 0.0


@dataclass(frozen=True)
class Activity:
    """One calendar day of usage (a single heatmap cell)."""
    date: str  # YYYY-MM-DD
    cost: float = 0.0
    level: int = 0  # 0-4, pre-quantized color bucket
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cache_hit_rate: Optional[float] = None
    model_breakdowns: Tuple[ModelBreakdown, ...] = ()

    @property
    def is_active(self) -> bool:
        """A day counts as active when it has strictly positive cost."""
        return self.cost > 0


@dataclass(frozen=True)
class PeakDay:
    """Placeholder peak used when no day has positive cost."""
    date: str = "-"
    cost: float = 0.0


PEAK_SENTINEL = PeakDay()


@dataclass(frozen=True)
class StatsToggles:
    """Per-value switches for the statistics panel."""
    daily_avg: bool = True
    weekly_avg: bool = True
    peak: bool = True
    active_days: bool = True

    @classmethod
    def all(cls, enabled: bool) -> "StatsToggles":
        return cls(enabled, enabled, enabled, enabled)

    @property
    def any_enabled(self) -> bool:
        return self.daily_avg or self.weekly_avg or self.peak or self.active_days


@dataclass(frozen=True)
class RenderConfig:
    """
    Fully normalized rendering options.

    Built at the boundary by config.loader.build_render_config; the
    layout engine only ever sees this expanded form.
    """
    cell_size: float = 16
    cell_gap: float = 4
    cell_radius: float = 3
    color_scheme: str = "light"
    theme: Optional[str] = None
    background: Optional[str] = None
    text_color: Optional[str] = None
    stats: StatsToggles = field(default_factory=StatsToggles)
    show_weekday_distribution: bool = True
    week_start: int = 0  # 0=Sunday .. 6=Saturday
    date_from: Optional[str] = None  # inclusive, YYYY-MM-DD
    date_to: Optional[str] = None  # inclusive, YYYY-MM-DD
    hide_month_labels: bool = False
    hide_total_count: bool = False
    show_weekday_labels: bool = True


@dataclass
class HeatmapStats:
    """Headline statistics derived from a series."""
    total_cost: float = 0.0
    daily_avg: float = 0.0
    weekly_avg: float = 0.0
    peak: Union[Activity, PeakDay] = PEAK_SENTINEL
    active_days: int = 0
    total_days: int = 0


@dataclass
class WeekdayStats:
    """Per-weekday averages over active days, indexed Sunday=0."""
    averages: List[float] = field(default_factory=lambda: [0.0] * 7)
    max_average: float = 0.0
    totals: List[float] = field(default_factory=lambda: [0.0] * 7)
    counts: List[int] = field(default_factory=lambda: [0] * 7)
