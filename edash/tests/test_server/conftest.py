"""Test fixtures for server tests.

Builds the app with a deterministic heatmap engine for testing API endpoints.
"""

import copy

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from edash.config.loader import DEFAULT_CONFIG
from edash.heatmap.engine import HeatmapEngine
from edash.heatmap.overlay import OverlayPublisher
from edash.server.app import create_app
from edash.server.websocket import ConnectionManager


@pytest.fixture
def test_config():
    """Default configuration, isolated per test."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def app(test_config):
    """Create the app with state set up as the lifespan would."""
    app = create_app(config=test_config)

    # Override lifespan by manually setting up app state
    app.state.engine = HeatmapEngine.from_config(test_config)
    app.state.overlay = OverlayPublisher()
    app.state.ws_manager = ConnectionManager()
    return app


@pytest_asyncio.fixture
async def client(app):
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
