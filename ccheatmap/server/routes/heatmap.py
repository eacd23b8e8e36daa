"""Heatmap API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ccheatmap.config.loader import build_render_config
from ccheatmap.models.entities import RenderConfig
from ccheatmap.models.themes import DAY_NAMES
from ccheatmap.render.layout import HeatmapLayout, compute_layout
from ccheatmap.render.svg import build_error_svg, serialize_svg
from ccheatmap.server.dependencies import get_config, load_request_data
from ccheatmap.server.models.heatmap import (
    HeatmapCell,
    HeatmapLayoutResponse,
    HeatmapStatsResponse,
    MonthLabel,
    PeakDayModel,
    WeekdayAverage,
)

logger = logging.getLogger("ccheatmap.server")

router = APIRouter(prefix="/api", tags=["heatmap"])

SVG_MEDIA_TYPE = "image/svg+xml"


def get_render_config(
    color_scheme: Optional[str] = Query(None, alias="colorScheme"),
    theme: Optional[str] = Query(None),
    block_size: Optional[str] = Query(None, alias="blockSize"),
    block_margin: Optional[str] = Query(None, alias="blockMargin"),
    block_radius: Optional[str] = Query(None, alias="blockRadius"),
    bg: Optional[str] = Query(None),
    text_color: Optional[str] = Query(None, alias="textColor"),
    stats: Optional[str] = Query(None),
    daily_avg: Optional[str] = Query(None, alias="dailyAvg"),
    weekly_avg: Optional[str] = Query(None, alias="weeklyAvg"),
    peak: Optional[str] = Query(None),
    active_days: Optional[str] = Query(None, alias="activeDays"),
    weekday: Optional[str] = Query(None),
    week_start: Optional[str] = Query(None, alias="weekStart"),
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    config: dict = Depends(get_config),
) -> RenderConfig:
    """Merge query parameters over the configured render defaults.

    Parameters arrive as strings; unparsable numbers fall back to the
    default instead of failing the request.
    """
    query = {
        "colorScheme": color_scheme,
        "theme": theme,
        "blockSize": block_size,
        "blockMargin": block_margin,
        "blockRadius": block_radius,
        "bg": bg,
        "textColor": text_color,
        "stats": stats,
        "dailyAvg": daily_avg,
        "weeklyAvg": weekly_avg,
        "peak": peak,
        "activeDays": active_days,
        "weekday": weekday,
        "weekStart": week_start,
        "start": start,
        "end": end,
    }
    return build_render_config(config.get("render"), query)


async def _load_layout(config: dict, render_config: RenderConfig) -> HeatmapLayout:
    try:
        data = await load_request_data(config)
    except (OSError, ValueError) as exc:
        logger.warning("Activity data unavailable: %s", exc)
        raise HTTPException(status_code=500, detail="Activity data unavailable") from exc
    return compute_layout(data, render_config)


def _stats_response(layout: HeatmapLayout) -> HeatmapStatsResponse:
    stats = layout.stats
    weekday = layout.weekday_stats
    return HeatmapStatsResponse(
        total_cost=stats.total_cost,
        daily_avg=stats.daily_avg,
        weekly_avg=stats.weekly_avg,
        peak=PeakDayModel(date=stats.peak.date, cost=stats.peak.cost),
        active_days=stats.active_days,
        total_days=stats.total_days,
        weekday_averages=[
            WeekdayAverage(day=name, index=i, average=weekday.averages[i], active_days=weekday.counts[i])
            for i, name in enumerate(DAY_NAMES)
        ],
        max_weekday_avg=weekday.max_average,
    )


@router.get("/heatmap")
async def heatmap_svg(
    render_config: RenderConfig = Depends(get_render_config),
    config: dict = Depends(get_config),
):
    """Render the heatmap as a standalone SVG document."""
    try:
        data = await load_request_data(config)
    except (OSError, ValueError) as exc:
        logger.warning("Activity data unavailable: %s", exc)
        return Response(
            content=build_error_svg("data.json not found"),
            status_code=500,
            media_type=SVG_MEDIA_TYPE,
        )

    svg = serialize_svg(compute_layout(data, render_config))
    max_age = config.get("server", {}).get("cache_max_age", 3600)
    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": f"public, max-age={max_age}, s-maxage={max_age}"},
    )


@router.get("/heatmap/stats", response_model=HeatmapStatsResponse)
async def heatmap_stats(
    render_config: RenderConfig = Depends(get_render_config),
    config: dict = Depends(get_config),
):
    """Get headline statistics and weekday averages for the filtered series."""
    layout = await _load_layout(config, render_config)
    return _stats_response(layout)


@router.get("/heatmap/layout", response_model=HeatmapLayoutResponse)
async def heatmap_layout(
    render_config: RenderConfig = Depends(get_render_config),
    config: dict = Depends(get_config),
):
    """Get computed cell geometry and tooltips for interactive clients."""
    layout = await _load_layout(config, render_config)
    return HeatmapLayoutResponse(
        width=layout.width,
        height=layout.height,
        background=layout.background,
        text_color=layout.text_color,
        palette=list(layout.palette),
        week_start=render_config.week_start,
        month_labels=[MonthLabel(x=m.x, y=m.y, label=m.text) for m in layout.month_labels],
        cells=[
            HeatmapCell(
                date=c.date, x=c.x, y=c.y, size=c.size, radius=c.radius,
                level=c.level, fill=c.fill, tooltip=c.tooltip,
            )
            for c in layout.cells
        ],
        total_label=layout.total_label.text if layout.total_label else None,
        stats=_stats_response(layout),
    )
