"""ETL package - loading activity data from data.json."""

from .loader import load_activities, parse_activities, to_level

__all__ = ["load_activities", "parse_activities", "to_level"]
