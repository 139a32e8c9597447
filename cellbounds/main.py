"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cellbounds.config import Settings, settings
from cellbounds.dependencies import get_settings
from cellbounds.engine.registry import load_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.cellbounds_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the app. Explicit settings also replace the get_settings dependency."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="cellbounds",
        description="Boundary lines that split a container between its rectangles",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules to trigger registration
    load_transforms()

    from cellbounds.api.boundaries import build_boundary_cache
    from cellbounds.api.router import api_router

    app.include_router(api_router)

    app.state.boundary_cache = build_boundary_cache(app_settings.boundary_cache_size)
    if app_settings is not settings:
        app.dependency_overrides[get_settings] = lambda: app_settings

    return app


app = create_app()
