"""
Aggregations over an activity series.

Pure functions: weekly bucketing, per-weekday averages and headline
statistics. Nothing here re-sorts or validates the series.
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence

from ccheatmap.models.entities import (
    Activity, HeatmapStats, WeekdayStats, PEAK_SENTINEL
)


def parse_day(date_str: str) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    return date.fromisoformat(date_str[:10])


def weekday_index(date_str: str) -> int:
    """Weekday of an ISO date with Sunday=0 .. Saturday=6."""
    return (parse_day(date_str).weekday() + 1) % 7


def week_row(date_str: str, week_start: int = 0) -> int:
    """Row of a day within its week column, counted from week_start."""
    return (weekday_index(date_str) - week_start) % 7


def filter_date_range(
    data: Sequence[Activity],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> List[Activity]:
    """Keep records whose date lies in [date_from, date_to] (either bound optional)."""
    result = []
    for d in data:
        if date_from and d.date < date_from:
            continue
        if date_to and d.date > date_to:
            continue
        result.append(d)
    return result


def group_by_weeks(data: Sequence[Activity], week_start: int = 0) -> List[List[Activity]]:
    """
    Split an ordered series into week buckets.

    A new bucket opens when a record starts a later calendar week than
    the current bucket. For a contiguous series this is exactly "the
    record falls on week_start". Short first/last buckets are kept as-is.

    Args:
        data: Activity records in ascending date order
        week_start: Weekday that opens a week (0=Sunday .. 6=Saturday)

    Returns:
        List of buckets, each a list of 1-7 records
    """
    weeks: List[List[Activity]] = []
    current: List[Activity] = []
    current_week: Optional[date] = None

    for d in data:
        day = parse_day(d.date)
        week_of = day - timedelta(days=week_row(d.date, week_start))
        if current and week_of != current_week:
            weeks.append(current)
            current = []
        current.append(d)
        current_week = week_of

    if current:
        weeks.append(current)
    return weeks


def calc_weekday_stats(data: Sequence[Activity]) -> WeekdayStats:
    """Average cost per weekday over active days only."""
    totals = [0.0] * 7
    counts = [0] * 7
    for d in data:
        if d.cost > 0:
            dow = weekday_index(d.date)
            totals[dow] += d.cost
            counts[dow] += 1

    averages = [totals[i] / counts[i] if counts[i] else 0.0 for i in range(7)]
    return WeekdayStats(
        averages=averages,
        max_average=max(averages),
        totals=totals,
        counts=counts,
    )


def calc_stats(data: Sequence[Activity], weeks: Sequence[Sequence[Activity]]) -> HeatmapStats:
    """
    Compute headline statistics.

    daily_avg divides by active days; weekly_avg divides by active weeks
    (buckets with positive total). Peak keeps the earliest date on ties.
    """
    total_cost = sum(d.cost for d in data)
    active = [d for d in data if d.cost > 0]
    daily_avg = total_cost / len(active) if active else 0.0

    peak = PEAK_SENTINEL
    for d in active:
        if d.cost > peak.cost:
            peak = d

    weekly_totals = [sum(d.cost for d in week) for week in weeks]
    active_weeks = [t for t in weekly_totals if t > 0]
    weekly_avg = sum(active_weeks) / len(active_weeks) if active_weeks else 0.0

    return HeatmapStats(
        total_cost=total_cost,
        daily_avg=daily_avg,
        weekly_avg=weekly_avg,
        peak=peak,
        active_days=len(active),
        total_days=len(data),
    )


def year_label(data: Sequence[Activity]) -> str:
    """'2025' for a single-year series, '2024~2025' across years, '' when empty."""
    if not data:
        return ""
    first_year = data[0].date[:4]
    last_year = data[-1].date[:4]
    return first_year if first_year == last_year else f"{first_year}~{last_year}"
