"""
Loader for ccheatmap activity data.

Reads a data.json file (a JSON array of daily entries) into Activity
records. Entry order is preserved; nothing is sorted or gap-filled.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ccheatmap.etl.validator import (
    validate_entry, validate_cost, validate_token_count, validate_level, validate_rate
)
from ccheatmap.models.entities import Activity, ModelBreakdown

logger = logging.getLogger("ccheatmap.etl")


def to_level(cost: float, max_cost: float) -> int:
    """Quantize cost into 0-4 by its ratio to the series maximum."""
    if cost <= 0 or max_cost <= 0:
        return 0
    ratio = cost / max_cost
    if ratio <= 0.25:
        return 1
    if ratio <= 0.5:
        return 2
    if ratio <= 0.75:
        return 3
    return 4


def parse_breakdowns(raw: Any) -> tuple:
    """Parse modelBreakdowns into ModelBreakdown records, skipping malformed items."""
    if not isinstance(raw, list):
        return ()
    result = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        label = item.get('model') or item.get('label')
        if not label:
            continue
        result.append(ModelBreakdown(label=str(label), cost=validate_cost(item.get('cost'))))
    return tuple(result)


def parse_activity(entry: Dict[str, Any], level: int) -> Activity:
    """Build an Activity from a validated entry."""
    cost = entry.get('count', entry.get('cost'))
    return Activity(
        date=entry['date'],
        cost=validate_cost(cost),
        level=level,
        input_tokens=validate_token_count(entry.get('inputTokens')),
        output_tokens=validate_token_count(entry.get('outputTokens')),
        total_tokens=validate_token_count(entry.get('totalTokens')),
        cache_hit_rate=validate_rate(entry.get('cacheHitRate')),
        model_breakdowns=parse_breakdowns(entry.get('modelBreakdowns')),
    )


def parse_activities(entries: Any) -> List[Activity]:
    """
    Convert a decoded JSON document into Activity records.

    Invalid entries are skipped with a warning. Entries lacking a level
    get one from to_level against the maximum cost of the series.

    Raises:
        ValueError: if the document is not a JSON array
    """
    if not isinstance(entries, list):
        raise ValueError("Activity data must be a JSON array")

    valid = []
    for i, entry in enumerate(entries):
        result = validate_entry(entry)
        if not result:
            logger.warning("Skipping entry %d: %s", i, result.reason)
            continue
        valid.append(entry)

    max_cost = max(
        (validate_cost(e.get('count', e.get('cost'))) for e in valid),
        default=0.0,
    )

    activities = []
    for entry in valid:
        level = validate_level(entry.get('level'))
        if level is None:
            level = to_level(validate_cost(entry.get('count', entry.get('cost'))), max_cost)
        activities.append(parse_activity(entry, level))

    logger.debug("Parsed %d activities (%d skipped)", len(activities), len(entries) - len(valid))
    return activities


def load_activities(path: Union[str, Path], encoding: Optional[str] = 'utf-8') -> List[Activity]:
    """
    Load activity records from a JSON file.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not valid JSON or not an array
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Activity data not found: {path}")

    with open(path, 'r', encoding=encoding) as f:
        entries = json.load(f)

    return parse_activities(entries)
