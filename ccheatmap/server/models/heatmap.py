"""Pydantic models for heatmap API."""

from typing import List, Optional

from pydantic import BaseModel


class PeakDayModel(BaseModel):
    date: str
    cost: float


class WeekdayAverage(BaseModel):
    day: str
    index: int  # 0=Sunday, 6=Saturday
    average: float
    active_days: int


class HeatmapStatsResponse(BaseModel):
    total_cost: float
    daily_avg: float
    weekly_avg: float
    peak: PeakDayModel
    active_days: int
    total_days: int
    weekday_averages: List[WeekdayAverage]
    max_weekday_avg: float


class MonthLabel(BaseModel):
    x: float
    y: float
    label: str


class HeatmapCell(BaseModel):
    date: str
    x: float
    y: float
    size: float
    radius: float
    level: int
    fill: str
    tooltip: List[str]


class HeatmapLayoutResponse(BaseModel):
    width: float
    height: float
    background: str
    text_color: str
    palette: List[str]
    week_start: int
    month_labels: List[MonthLabel]
    cells: List[HeatmapCell]
    total_label: Optional[str] = None
    stats: HeatmapStatsResponse
