"""FastAPI dependency injection for the heatmap engine, overlay and config."""

from fastapi import Request

from edash.heatmap.engine import HeatmapEngine
from edash.heatmap.overlay import OverlayPublisher
from edash.server.websocket import ConnectionManager


def get_engine(request: Request) -> HeatmapEngine:
    """Get the shared heatmap engine from app state."""
    return request.app.state.engine


def get_overlay(request: Request) -> OverlayPublisher:
    """Get the overlay publisher from app state."""
    return request.app.state.overlay


def get_ws_manager(request: Request) -> ConnectionManager:
    """Get the websocket connection manager from app state."""
    return request.app.state.ws_manager


def get_config(request: Request) -> dict:
    """Get the loaded config from app state."""
    return request.app.state.config
