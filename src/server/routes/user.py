"""User profile endpoints (local login/logout)."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict

from fastapi import FastAPI, HTTPException

from src.routine_log import UserProfile

from ..dependencies import get_tracker, serialize_user
from ..schemas import UserProfileModel, UserResponse

logger = logging.getLogger(__name__)


def register_user_routes(app: FastAPI) -> None:
    """Register profile endpoints."""

    @app.get("/api/user", response_model=UserResponse)
    async def get_user() -> UserResponse:
        """Return the stored profile, if any."""
        tracker = get_tracker()
        profile = await asyncio.to_thread(tracker.get_user)
        return UserResponse(user=serialize_user(profile) if profile else None)

    @app.post("/api/user/login", response_model=UserResponse)
    async def login(request: UserProfileModel) -> UserResponse:
        """Store the profile of the user who signed in."""
        tracker = get_tracker()
        try:
            profile = UserProfile(
                name=request.name.strip(),
                email=request.email.strip(),
                photo_url=request.photo_url,
            )
            saved = await asyncio.to_thread(tracker.login, profile)
            return UserResponse(user=serialize_user(saved))
        except Exception as exc:
            logger.exception("Failed to save user profile: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to save user profile") from exc

    @app.post("/api/user/logout")
    async def logout() -> Dict[str, bool]:
        """Remove the stored profile."""
        tracker = get_tracker()
        await asyncio.to_thread(tracker.logout)
        return {"logged_out": True}
