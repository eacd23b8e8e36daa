"""
Validation for ccheatmap data loading.

Normalizes the loosely-typed fields of a data.json entry.
"""

import math
from datetime import date
from typing import Any, Optional


class ValidationResult:
    """Result of validating an entry."""

    def __init__(self, valid: bool, reason: Optional[str] = None):
        self.valid = valid
        self.reason = reason

    def __bool__(self):
        return self.valid


def validate_entry(entry: Any) -> ValidationResult:
    """
    Validate a data.json entry.

    Rules:
    - Must be a JSON object
    - Must have a YYYY-MM-DD date

    Args:
        entry: Parsed JSON value

    Returns:
        ValidationResult with valid flag and reason if invalid
    """
    if not isinstance(entry, dict):
        return ValidationResult(False, "Entry is not an object")

    date_str = entry.get('date')
    if not date_str or not isinstance(date_str, str):
        return ValidationResult(False, "Missing date")

    try:
        date.fromisoformat(date_str)
    except ValueError:
        return ValidationResult(False, f"Invalid date format: {date_str}")

    return ValidationResult(True)


def validate_token_count(value: Any) -> Optional[int]:
    """
    Normalize an optional token count.

    None stays None (field absent); negative, non-finite or unparsable
    values become 0.
    """
    if value is None:
        return None

    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def validate_cost(value: Any) -> float:
    """Normalize a cost: non-numeric, non-finite or negative values become 0.0."""
    try:
        cost = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(cost) or cost < 0:
        return 0.0
    return cost


def validate_level(value: Any) -> Optional[int]:
    """Parse a level if present; range is not enforced here."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def validate_rate(value: Any) -> Optional[float]:
    """Parse a cache-hit ratio, clamped to 0-100."""
    if value is None:
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(rate):
        return None
    return min(100.0, max(0.0, rate))
