"""Health check endpoint."""

import time

from fastapi import APIRouter, Depends

from ccheatmap import __version__
from ccheatmap.config.loader import get_data_path
from ccheatmap.server.dependencies import get_config
from ccheatmap.server.models.common import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(config: dict = Depends(get_config)):
    """Health check: returns status, uptime, data file presence."""
    uptime = int(time.time() - _start_time)
    data_status = "ok" if get_data_path(config).is_file() else "missing"

    return HealthResponse(
        status="ok",
        uptime_seconds=uptime,
        data=data_status,
        version=__version__,
    )
