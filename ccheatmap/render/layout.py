"""
Heatmap layout engine.

Turns an activity series plus a RenderConfig into absolute pixel
geometry. The result is a tree of plain dataclasses; serialization to
SVG (render/svg.py) or JSON (server routes) happens separately.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ccheatmap.models.entities import Activity, RenderConfig, HeatmapStats, WeekdayStats
from ccheatmap.models.themes import (
    MONTHS, DAY_NAMES, PAD, LABEL_W, HEADER_H, LEGEND_H, STATS_H, WEEKDAY_H,
    LEGEND_CAPTION_W, LEGEND_TAIL_W, STATS_COLUMN_W, BAR_ROW_H, BAR_H,
    Palette, resolve_palette, resolve_scheme_colors,
)
from ccheatmap.output.formatter import format_currency, format_number, format_plain
from ccheatmap.render.aggregate import (
    filter_date_range, group_by_weeks, calc_stats, calc_weekday_stats,
    parse_day, weekday_index, week_row, year_label,
)


@dataclass
class Label:
    x: float
    y: float
    text: str
    css_class: str


@dataclass
class Cell:
    """One day square with its tooltip lines (unescaped)."""
    x: float
    y: float
    size: float
    radius: float
    fill: str
    date: str
    level: int
    tooltip: List[str] = field(default_factory=list)


@dataclass
class Swatch:
    x: float
    y: float
    size: float
    radius: float
    fill: str


@dataclass
class Legend:
    """'Less [][][][][] More' strip anchored to the right edge."""
    x: float
    y: float
    text_y: float
    more_x: float
    swatches: List[Swatch] = field(default_factory=list)


@dataclass
class Divider:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str


@dataclass
class StatItem:
    """Rendered as '<label><b>value</b><suffix>'."""
    key: str
    x: float
    y: float
    label: str
    value: str
    suffix: str = ""


@dataclass
class WeekdayBar:
    day: str
    label_x: float
    label_y: float
    x: float
    y: float
    width: float
    height: float
    fill: str
    value_text: str
    value_x: float
    value_y: float


@dataclass
class HeatmapLayout:
    """Complete geometry of one rendered heatmap."""
    width: float
    height: float
    base_height: float
    background: str
    text_color: str
    sub_color: str
    palette: Palette
    stats: HeatmapStats
    weekday_stats: WeekdayStats
    month_labels: List[Label] = field(default_factory=list)
    day_labels: List[Label] = field(default_factory=list)
    cells: List[Cell] = field(default_factory=list)
    legend: Optional[Legend] = None
    total_label: Optional[Label] = None
    divider: Optional[Divider] = None
    stat_items: List[StatItem] = field(default_factory=list)
    weekday_title: Optional[Label] = None
    weekday_bars: List[WeekdayBar] = field(default_factory=list)


def level_color(palette: Palette, level: int) -> str:
    """Palette entry for a level; anything out of range gets the lowest color."""
    if isinstance(level, int) and 0 <= level < len(palette):
        return palette[level]
    return palette[0]


def build_tooltip(activity: Activity) -> List[str]:
    """Tooltip lines for a cell: header, then cost details or 'No data'."""
    lines = [f"{activity.date} ({DAY_NAMES[weekday_index(activity.date)]})"]
    if activity.cost > 0:
        lines.append(f"Cost: {format_currency(activity.cost)}")
        if activity.input_tokens is not None:
            lines.append(
                f"In: {format_number(activity.input_tokens)} / "
                f"Out: {format_number(activity.output_tokens or 0)}"
            )
        if activity.total_tokens:
            lines.append(f"Total: {format_number(activity.total_tokens)}")
        if activity.cache_hit_rate is not None:
            lines.append(f"Cache hit: {format_plain(activity.cache_hit_rate)}%")
        for breakdown in activity.model_breakdowns:
            lines.append(f"{breakdown.label}: {format_currency(breakdown.cost)}")
    else:
        lines.append("No data")
    return lines


def compute_layout(data: Sequence[Activity], config: Optional[RenderConfig] = None) -> HeatmapLayout:
    """
    Compute the full heatmap geometry.

    Panels stack top to bottom: grid, legend/total line, statistics,
    weekday distribution. Empty input yields an empty grid with zeroed
    statistics.
    """
    if config is None:
        config = RenderConfig()

    data = filter_date_range(data, config.date_from, config.date_to)

    palette = resolve_palette(config.theme, config.color_scheme)
    scheme = resolve_scheme_colors(config.color_scheme)

    block = config.cell_size
    gap = config.cell_gap
    radius = config.cell_radius
    step = block + gap
    grid_top = PAD + HEADER_H
    grid_left = PAD + LABEL_W

    weeks = group_by_weeks(data, config.week_start)
    stats = calc_stats(data, weeks)
    weekday_stats = calc_weekday_stats(data)

    # Never narrower than the legend strip
    min_width = PAD * 2 + LABEL_W + LEGEND_CAPTION_W + len(palette) * step + LEGEND_TAIL_W
    width = max(grid_left + PAD + len(weeks) * step + gap, min_width)
    base_height = PAD * 2 + HEADER_H + 7 * step + gap + LEGEND_H

    show_stats = config.stats.any_enabled
    show_weekday = config.show_weekday_distribution
    height = base_height + (STATS_H if show_stats else 0) + (WEEKDAY_H if show_weekday else 0)

    layout = HeatmapLayout(
        width=width,
        height=height,
        base_height=base_height,
        background=config.background or scheme["background"],
        text_color=config.text_color or scheme["text"],
        sub_color=scheme["sub"],
        palette=palette,
        stats=stats,
        weekday_stats=weekday_stats,
    )

    # Month labels: one per run of weeks starting in the same month
    if not config.hide_month_labels:
        prev_month = None
        for w, week in enumerate(weeks):
            day = parse_day(week[0].date)
            if (day.year, day.month) != prev_month:
                layout.month_labels.append(
                    Label(grid_left + w * step, PAD + 14, MONTHS[day.month - 1], "month")
                )
                prev_month = (day.year, day.month)

    if config.show_weekday_labels:
        for row in (1, 3, 5):
            layout.day_labels.append(Label(
                PAD, grid_top + row * step + block - 2,
                DAY_NAMES[(config.week_start + row) % 7], "day",
            ))

    for w, week in enumerate(weeks):
        for d in week:
            layout.cells.append(Cell(
                x=grid_left + w * step,
                y=grid_top + week_row(d.date, config.week_start) * step,
                size=block,
                radius=radius,
                fill=level_color(palette, d.level),
                date=d.date,
                level=d.level,
                tooltip=build_tooltip(d),
            ))

    legend_x = width - PAD - len(palette) * step - LEGEND_TAIL_W
    legend_y = grid_top + 7 * step + 10
    layout.legend = Legend(
        x=legend_x,
        y=legend_y,
        text_y=legend_y + block - 1,
        more_x=legend_x + LEGEND_CAPTION_W + len(palette) * step,
        swatches=[
            Swatch(legend_x + LEGEND_CAPTION_W + i * step, legend_y, block, radius, color)
            for i, color in enumerate(palette)
        ],
    )

    if not config.hide_total_count:
        years = year_label(data)
        text = f"\N{MONEY BAG} Total: {format_currency(stats.total_cost)} across {len(data)} days"
        if years:
            text += f" ({years})"
        layout.total_label = Label(grid_left, legend_y + block - 1, text, "total")

    stats_y = legend_y + block + 20
    if show_stats:
        layout.divider = Divider(PAD, stats_y - 6, width - PAD, stats_y - 6, scheme["divider"])
        toggles = config.stats
        if toggles.daily_avg:
            layout.stat_items.append(StatItem(
                "daily_avg", PAD, stats_y + 12, "Daily avg: ", format_currency(stats.daily_avg)))
        if toggles.weekly_avg:
            layout.stat_items.append(StatItem(
                "weekly_avg", PAD + STATS_COLUMN_W, stats_y + 12, "Weekly avg: ",
                format_currency(stats.weekly_avg)))
        if toggles.peak:
            layout.stat_items.append(StatItem(
                "peak", PAD, stats_y + 30, "Peak: ", format_currency(stats.peak.cost),
                f" ({stats.peak.date})"))
        if toggles.active_days:
            layout.stat_items.append(StatItem(
                "active_days", PAD + STATS_COLUMN_W, stats_y + 30, "Active: ",
                str(stats.active_days), f" / {stats.total_days} days"))

    if show_weekday:
        weekday_y = stats_y + (STATS_H if show_stats else 10)
        layout.weekday_title = Label(PAD, weekday_y, "Avg by weekday", "section-title")
        bar_max = max(0, width - PAD * 2 - 100)
        max_avg = weekday_stats.max_average
        top = len(palette) - 1
        for i, name in enumerate(DAY_NAMES):
            avg = weekday_stats.averages[i]
            relative = avg / max_avg if max_avg > 0 else 0.0
            bar_len = relative * bar_max
            color_index = min(top, max(0, math.ceil(relative * top)))
            bar_y = weekday_y + 14 + i * BAR_ROW_H
            layout.weekday_bars.append(WeekdayBar(
                day=name,
                label_x=PAD,
                label_y=bar_y + 12,
                x=PAD + 36,
                y=bar_y + 2,
                width=bar_len,
                height=BAR_H,
                fill=palette[color_index],
                value_text=format_currency(avg),
                value_x=PAD + 42 + bar_len,
                value_y=bar_y + 13,
            ))

    return layout
