"""FastAPI dependency injection for config and activity data."""

import asyncio
from typing import List

from fastapi import Request

from ccheatmap.config.loader import get_data_path
from ccheatmap.etl.loader import load_activities
from ccheatmap.models.entities import Activity


def get_config(request: Request) -> dict:
    """Get the loaded config from app state."""
    return request.app.state.config


async def load_request_data(config: dict) -> List[Activity]:
    """
    Read the activity series for one request.

    The file is re-read every time so regenerated data shows up without
    a restart. The read runs in a worker thread via asyncio.to_thread.
    Raises FileNotFoundError / ValueError like load_activities.
    """
    return await asyncio.to_thread(load_activities, get_data_path(config))
