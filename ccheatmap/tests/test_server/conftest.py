"""Test fixtures for server tests.

Writes a deterministic data.json and serves it through the app.
"""

import copy
import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ccheatmap.config.loader import DEFAULT_CONFIG
from ccheatmap.server.app import create_app


ACTIVITY_DATA = [
    {"date": "2026-02-01", "count": 0.0, "level": 0},
    {
        "date": "2026-02-02",
        "count": 1.25,
        "level": 1,
        "inputTokens": 1200,
        "outputTokens": 3400,
        "totalTokens": 4600,
        "cacheHitRate": 72.5,
        "modelBreakdowns": [
            {"model": "claude-sonnet-4-20250514", "cost": 1.0},
            {"model": "claude-haiku-4-5-20251001", "cost": 0.25},
        ],
    },
    {"date": "2026-02-03", "count": 5.0, "level": 4},
    {"date": "2026-02-04", "count": 2.5, "level": 2},
    {"date": "2026-02-05", "count": 0.0, "level": 0},
    {"date": "2026-02-06", "count": 0.0, "level": 0},
    {"date": "2026-02-07", "count": 0.0, "level": 0},
    {"date": "2026-02-08", "count": 5.0, "level": 4},
]


@pytest.fixture
def data_file(tmp_path):
    """Write the deterministic activity series to a temp data.json."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(ACTIVITY_DATA), encoding="utf-8")
    return path


def _make_config(data_path):
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["data_path"] = str(data_path)
    return config


@pytest_asyncio.fixture
async def client(data_file):
    """Async test client serving the temp data file."""
    app = create_app(config=_make_config(data_file))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def missing_data_client(tmp_path):
    """Async test client whose data file does not exist."""
    app = create_app(config=_make_config(tmp_path / "missing.json"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def overflow_data_client(tmp_path):
    """Async test client whose data file holds numbers json decodes to infinity."""
    path = tmp_path / "data.json"
    path.write_text(
        '[{"date": "2026-02-02", "count": 1, "level": 1e400, "inputTokens": 1e400,'
        ' "outputTokens": 10, "cacheHitRate": 50},'
        ' {"date": "2026-02-03", "count": Infinity}]',
        encoding="utf-8",
    )
    app = create_app(config=_make_config(path))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
