"""
FastAPI application factory for the fire & smoke monitor.

Routes:
- /api/health -> liveness
- /api/status -> latest detection status
- /api/frame.jpg -> latest annotated frame
"""

from __future__ import annotations

from fastapi import FastAPI

from .routes import api


def create_app() -> FastAPI:
    """Create the FastAPI app and wire routes."""
    app = FastAPI(
        title="Fire & Smoke Monitor",
        version="0.1.0",
        description="Heuristic fire and smoke detection status",
    )
    app.include_router(api.router, prefix="/api")
    return app
