"""FastAPI application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_coach, get_tracker, shutdown_tracker
from .routes import (
    register_coach_routes,
    register_health_routes,
    register_tracker_routes,
    register_user_routes,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # the day-check loop must not outlive the app
    shutdown_tracker()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Routine Tracker API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_routes(app)
    register_tracker_routes(app)
    register_user_routes(app)
    register_coach_routes(app)

    return app


app = create_app()

__all__ = ["app", "create_app", "get_coach", "get_tracker"]
