"""
Summary report for ccheatmap.

Text rendition of the heatmap statistics for the --summary view.
"""

from typing import Optional, Sequence

from ccheatmap.models.entities import Activity, RenderConfig
from ccheatmap.models.themes import DAY_NAMES
from ccheatmap.output.formatter import (
    format_currency, format_percentage, format_table, create_bar, bold, colorize, Colors
)
from ccheatmap.render.aggregate import (
    filter_date_range, group_by_weeks, calc_stats, calc_weekday_stats, year_label
)


def generate_summary(
    data: Sequence[Activity],
    config: Optional[RenderConfig] = None,
    color_enabled: bool = True
) -> str:
    """
    Generate the usage summary report.

    Args:
        data: Activity records in ascending date order
        config: Render options (date range, week start, stats toggles)
        color_enabled: Whether to apply colors
    """
    if config is None:
        config = RenderConfig()

    data = filter_date_range(data, config.date_from, config.date_to)
    lines = [bold("USAGE SUMMARY", color_enabled)]

    if not data:
        lines.append("")
        lines.append("No data for this period.")
        return '\n'.join(lines)

    lines.append(f"({data[0].date} to {data[-1].date}, {year_label(data)})")
    lines.append("")

    weeks = group_by_weeks(data, config.week_start)
    stats = calc_stats(data, weeks)
    weekday = calc_weekday_stats(data)

    active_pct = stats.active_days / stats.total_days * 100 if stats.total_days else 0
    lines.append(f"Total cost:   {colorize(format_currency(stats.total_cost), Colors.CYAN, color_enabled)}")
    if config.stats.daily_avg:
        lines.append(f"Daily avg:    {format_currency(stats.daily_avg)}")
    if config.stats.weekly_avg:
        lines.append(f"Weekly avg:   {format_currency(stats.weekly_avg)}")
    if config.stats.peak:
        lines.append(f"Peak:         {format_currency(stats.peak.cost)} ({stats.peak.date})")
    if config.stats.active_days:
        lines.append(
            f"Active days:  {stats.active_days} / {stats.total_days} "
            f"({format_percentage(active_pct)})"
        )

    if config.show_weekday_distribution:
        lines.append("")
        lines.append(bold("Avg by weekday", color_enabled))
        rows = []
        for i, name in enumerate(DAY_NAMES):
            rows.append([
                name,
                format_currency(weekday.averages[i]),
                str(weekday.counts[i]),
                create_bar(weekday.averages[i], weekday.max_average),
            ])
        lines.append(format_table(
            ['Day', 'Avg', 'Days', ''], rows, ['l', 'r', 'r', 'l'], color_enabled
        ))

    return '\n'.join(lines)
