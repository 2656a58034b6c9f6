"""
FastAPI application factory for the EDASH web dashboard.

Creates the app with all routes and lifespan management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from edash.config.loader import load_config
from edash.heatmap.engine import HeatmapEngine
from edash.heatmap.overlay import OverlayPublisher
from edash.server.websocket import ConnectionManager, overlay_message

logger = logging.getLogger("edash.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the heatmap engine and overlay state for the app's lifetime."""
    config = app.state.config if hasattr(app.state, "config") else load_config()
    app.state.config = config

    app.state.engine = HeatmapEngine.from_config(config)
    app.state.overlay = OverlayPublisher()
    app.state.ws_manager = ConnectionManager()

    yield

    logger.info("Shutting down with %d overlay clients connected",
                app.state.ws_manager.connection_count)


def create_app(config: dict = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="EDASH Dashboard API",
        description="Energy consumption heatmap analytics",
        version="1.0.0",
        lifespan=lifespan,
    )

    if config:
        app.state.config = config

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    # WebSocket endpoint
    @app.websocket("/ws/overlay")
    async def websocket_overlay(websocket: WebSocket):
        manager = websocket.app.state.ws_manager
        await manager.connect(websocket)
        try:
            # New clients start from the current overlay
            current = overlay_message(websocket.app.state.overlay.state)
            await websocket.send_text(current.model_dump_json())
            while True:
                data = await websocket.receive_text()
                if data == "ping":
                    await websocket.send_text('{"type":"pong"}')
        except WebSocketDisconnect:
            await manager.disconnect(websocket)

    # API routers
    from edash.server.routes.health import router as health_router
    from edash.server.routes.heatmap import router as heatmap_router

    app.include_router(health_router)
    app.include_router(heatmap_router)

    return app
