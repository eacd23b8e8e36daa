"""
Palette and calendar lookup tables for ccheatmap.

All tables are immutable and built once at import time.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

Palette = Tuple[str, str, str, str, str]

# Ordered 5-color sequences indexed by activity level
THEMES: Mapping[str, Palette] = MappingProxyType({
    "light": ("#ebedf0", "#c6e48b", "#7bc96f", "#239a3b", "#196127"),
    "dark": ("#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"),
    "blue": ("#ebedf0", "#c0ddf9", "#73b3f3", "#3886e1", "#1b4f91"),
    "orange": ("#ebedf0", "#ffdf80", "#ffa742", "#e87d2f", "#ac5219"),
    "pink": ("#ebedf0", "#ffc0cb", "#ff69b4", "#ff1493", "#c71585"),
})

DEFAULT_THEME = "light"

MONTHS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Sunday first, matching the weekday index used throughout rendering
DAY_NAMES: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Fixed layout allowances (pixels)
PAD = 16
LABEL_W = 36
HEADER_H = 24
LEGEND_H = 36
STATS_H = 50
WEEKDAY_H = 180
LEGEND_CAPTION_W = 40
LEGEND_TAIL_W = 60
STATS_COLUMN_W = 200
BAR_ROW_H = 22
BAR_H = 14

# Per-scheme defaults: background, text, secondary text, divider
SCHEME_COLORS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "light": MappingProxyType({
        "background": "transparent",
        "text": "#24292f",
        "sub": "#666",
        "divider": "#d0d7de",
    }),
    "dark": MappingProxyType({
        "background": "#0d1117",
        "text": "#c9d1d9",
        "sub": "#8b949e",
        "divider": "#30363d",
    }),
})


def resolve_palette(theme: Optional[str], color_scheme: Optional[str]) -> Palette:
    """
    Pick the palette for a render.

    An explicit theme wins over the color scheme. Unknown names fall
    through to the scheme's palette and finally to the light palette.
    """
    if theme and theme in THEMES:
        return THEMES[theme]
    if color_scheme and color_scheme in THEMES:
        return THEMES[color_scheme]
    return THEMES[DEFAULT_THEME]


def resolve_scheme_colors(color_scheme: Optional[str]) -> Mapping[str, str]:
    """Get the scheme-derived background/text colors, light by default."""
    return SCHEME_COLORS.get(color_scheme or DEFAULT_THEME, SCHEME_COLORS[DEFAULT_THEME])
