"""
Configuration loading for ccheatmap.

Handles loading configuration from ~/.ccheatmap/config.json with sensible
defaults, and normalizing raw render options into a RenderConfig.
"""

import copy
import json
import math
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

from ccheatmap.models.entities import RenderConfig, StatsToggles

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_path": "~/.ccheatmap/data.json",
    "output_path": "heatmap.svg",

    # Render defaults, overridable per call (CLI flags, query string)
    "render": {
        "cell_size": 16,
        "cell_gap": 4,
        "cell_radius": 3,
        "color_scheme": "light",
        "theme": None,
        "background": None,
        "text_color": None,
        "stats": True,
        "weekday": True,
        "week_start": 0,
        "start": None,
        "end": None,
        "hide_month_labels": False,
        "hide_total_count": False,
        "show_weekday_labels": True,
    },

    # Web server options
    "server": {
        "host": "0.0.0.0",
        "port": 3333,
        "cache_max_age": 3600,
    },
}

# camelCase query-string / widget names mapped onto render keys
OPTION_ALIASES: Dict[str, str] = {
    "blockSize": "cell_size",
    "blockMargin": "cell_gap",
    "blockRadius": "cell_radius",
    "colorScheme": "color_scheme",
    "bg": "background",
    "textColor": "text_color",
    "weekStart": "week_start",
    "hideMonthLabels": "hide_month_labels",
    "hideTotalCount": "hide_total_count",
    "showWeekdayLabels": "show_weekday_labels",
    "dailyAvg": "daily_avg",
    "weeklyAvg": "weekly_avg",
    "activeDays": "active_days",
    "showStatistics": "stats",
    "show_statistics": "stats",
    "showWeekdayDistribution": "weekday",
    "show_weekday_distribution": "weekday",
    "date_from": "start",
    "date_to": "end",
}

STATS_KEYS = ("daily_avg", "weekly_avg", "peak", "active_days")
COLOR_SCHEMES = ("light", "dark")


def get_config_path() -> Path:
    """Get path to config file."""
    return Path.home() / ".ccheatmap" / "config.json"


def get_data_path(config: Dict[str, Any]) -> Path:
    """Get expanded activity data path from config."""
    return Path(config["data_path"]).expanduser()


def load_config() -> Dict[str, Any]:
    """
    Load configuration from file, merging with defaults.

    Returns a complete configuration with all default values filled in.
    User config overrides defaults where specified.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)

            # Shallow merge sections
            for key in ['render', 'server']:
                if key in user_config and isinstance(user_config[key], dict):
                    config[key].update(user_config[key])

            # Direct override for simple values
            for key in ['data_path', 'output_path']:
                if key in user_config:
                    config[key] = user_config[key]

        except json.JSONDecodeError as e:
            print(f"Warning: Could not parse config file: {e}")
        except (OSError, AttributeError) as e:
            print(f"Warning: Error loading config: {e}")

    return config


def parse_bool(value: Any, default: Optional[bool] = None) -> Optional[bool]:
    """Coerce a flag: bools pass through, 'true'/'1' and 'false'/'0' strings convert."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off"):
        return False
    return default


def parse_num(value: Any, default: float) -> float:
    """Coerce a number, keeping the default for missing or unparsable input."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(n):
        return default
    return int(n) if n.is_integer() else n


def _normalize_keys(options: Mapping[str, Any]) -> Dict[str, Any]:
    return {OPTION_ALIASES.get(k, k): v for k, v in options.items()}


def _build_stats(raw: Any, options: Mapping[str, Any]) -> StatsToggles:
    """Expand the stats option (bool or per-field mapping) plus per-field overrides."""
    fields = {key: True for key in STATS_KEYS}
    if isinstance(raw, Mapping):
        for k, v in _normalize_keys(raw).items():
            if k in fields:
                fields[k] = parse_bool(v, fields[k])
    else:
        enabled = parse_bool(raw, True)
        if not enabled:
            # stats=false switches every value off regardless of per-field flags
            return StatsToggles.all(False)

    for key in STATS_KEYS:
        if key in options:
            fields[key] = parse_bool(options[key], fields[key])
    return StatsToggles(**fields)


def build_render_config(*layers: Optional[Mapping[str, Any]]) -> RenderConfig:
    """
    Merge option layers (later wins) into a normalized RenderConfig.

    Each layer may use snake_case keys or the camelCase widget/query names
    (blockSize, colorScheme, bg, ...). None values are ignored so a
    missing query parameter never masks a configured default.
    """
    merged: Dict[str, Any] = dict(DEFAULT_CONFIG["render"])
    for layer in layers:
        if not layer:
            continue
        for key, value in _normalize_keys(layer).items():
            if value is not None:
                merged[key] = value

    defaults = DEFAULT_CONFIG["render"]
    color_scheme = merged.get("color_scheme")
    if color_scheme not in COLOR_SCHEMES:
        color_scheme = defaults["color_scheme"]

    week_start = int(parse_num(merged.get("week_start"), defaults["week_start"]))
    if not 0 <= week_start <= 6:
        week_start = defaults["week_start"]

    return RenderConfig(
        cell_size=parse_num(merged.get("cell_size"), defaults["cell_size"]),
        cell_gap=parse_num(merged.get("cell_gap"), defaults["cell_gap"]),
        cell_radius=parse_num(merged.get("cell_radius"), defaults["cell_radius"]),
        color_scheme=color_scheme,
        theme=merged.get("theme") or None,
        background=merged.get("background") or None,
        text_color=merged.get("text_color") or None,
        stats=_build_stats(merged.get("stats"), merged),
        show_weekday_distribution=parse_bool(merged.get("weekday"), True),
        week_start=week_start,
        date_from=merged.get("start") or None,
        date_to=merged.get("end") or None,
        hide_month_labels=parse_bool(merged.get("hide_month_labels"), False),
        hide_total_count=parse_bool(merged.get("hide_total_count"), False),
        show_weekday_labels=parse_bool(merged.get("show_weekday_labels"), True),
    )
