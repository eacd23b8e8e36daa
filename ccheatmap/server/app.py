"""
FastAPI application factory for the ccheatmap web server.

Creates the app with the heatmap and health routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ccheatmap import __version__
from ccheatmap.config.loader import load_config, get_data_path
from ccheatmap.server.models.common import ErrorResponse

logger = logging.getLogger("ccheatmap.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Resolve configuration once at startup."""
    config = app.state.config if hasattr(app.state, "config") else load_config()
    app.state.config = config

    data_path = get_data_path(config)
    if not data_path.exists():
        logger.warning("Activity data not found at %s; /api/heatmap will return an error image", data_path)

    yield


def create_app(config: dict = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="ccheatmap API",
        description="Calendar heatmap of Claude Code usage",
        version=__version__,
        lifespan=lifespan,
    )

    if config:
        app.state.config = config

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error", detail=str(exc)).model_dump(),
        )

    from ccheatmap.server.routes.health import router as health_router
    from ccheatmap.server.routes.heatmap import router as heatmap_router

    app.include_router(health_router)
    app.include_router(heatmap_router)

    return app
