"""Tests for the WebSocket ConnectionManager.

Validates connect, disconnect, broadcast and overlay publishing.
Uses mock WebSocket objects to avoid needing a real ASGI scope.
"""

import json
from unittest.mock import AsyncMock

import pytest

from edash.models.entities import Day, OverlayState
from edash.server.models.heatmap import OverlayMessage
from edash.server.websocket import ConnectionManager, overlay_message


@pytest.fixture
def manager():
    """Create a fresh ConnectionManager instance."""
    return ConnectionManager()


def make_mock_ws():
    """Create a mock WebSocket with accept() and send_text() as async mocks."""
    ws = AsyncMock()
    ws.accept = AsyncMock()
    ws.send_text = AsyncMock()
    return ws


@pytest.mark.asyncio
class TestConnect:
    """Tests for ConnectionManager.connect()."""

    async def test_connect_calls_accept(self, manager):
        ws = make_mock_ws()
        await manager.connect(ws)
        ws.accept.assert_awaited_once()

    async def test_connect_same_ws_twice_does_not_duplicate(self, manager):
        ws = make_mock_ws()
        await manager.connect(ws)
        await manager.connect(ws)
        assert manager.connection_count == 1

    async def test_disconnect_nonexistent_ws_does_not_raise(self, manager):
        await manager.disconnect(make_mock_ws())
        assert manager.connection_count == 0

    async def test_disconnect_leaves_other_connections_intact(self, manager):
        ws1 = make_mock_ws()
        ws2 = make_mock_ws()
        await manager.connect(ws1)
        await manager.connect(ws2)
        await manager.disconnect(ws1)
        assert ws1 not in manager.active_connections
        assert ws2 in manager.active_connections


@pytest.mark.asyncio
class TestBroadcast:
    """Tests for ConnectionManager.broadcast()."""

    async def test_broadcast_sends_to_all_connected(self, manager):
        ws1 = make_mock_ws()
        ws2 = make_mock_ws()
        await manager.connect(ws1)
        await manager.connect(ws2)

        message = OverlayMessage(day=Day.TUE, hour=9, value=300.0, visible=True)
        await manager.broadcast(message)

        expected_data = message.model_dump_json()
        ws1.send_text.assert_awaited_once_with(expected_data)
        ws2.send_text.assert_awaited_once_with(expected_data)

    async def test_broadcast_no_clients_does_nothing(self, manager):
        await manager.broadcast(OverlayMessage())

    async def test_broadcast_removes_disconnected_clients(self, manager):
        """If send_text raises, that client should be removed."""
        ws_good = make_mock_ws()
        ws_bad = make_mock_ws()
        ws_bad.send_text = AsyncMock(side_effect=Exception("connection closed"))

        await manager.connect(ws_good)
        await manager.connect(ws_bad)
        await manager.broadcast(OverlayMessage())

        assert ws_bad not in manager.active_connections
        assert ws_good in manager.active_connections
        ws_good.send_text.assert_awaited_once()


@pytest.mark.asyncio
class TestPublishOverlay:
    """Tests for overlay publishing."""

    async def test_overlay_message_shape(self):
        state = OverlayState(day=Day.FRI, hour=8, value=401.5, x=12.0, y=3.0, visible=True)
        message = overlay_message(state)
        assert isinstance(message, OverlayMessage)
        assert json.loads(message.model_dump_json()) == {
            "type": "overlay", "day": "Fri", "hour": 8, "value": 401.5,
            "x": 12.0, "y": 3.0, "visible": True,
        }

    async def test_publish_overlay_sends_state(self, manager):
        ws = make_mock_ws()
        await manager.connect(ws)

        await manager.publish_overlay(OverlayState(day=Day.MON, hour=7, value=360.0, visible=True))

        parsed = json.loads(ws.send_text.call_args[0][0])
        assert parsed["type"] == "overlay"
        assert parsed["day"] == "Mon"
        assert parsed["visible"] is True

    async def test_publish_empty_overlay(self, manager):
        ws = make_mock_ws()
        await manager.connect(ws)

        await manager.publish_overlay(OverlayState())

        parsed = json.loads(ws.send_text.call_args[0][0])
        assert parsed["day"] is None
        assert parsed["visible"] is False
