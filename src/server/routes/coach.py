"""Coach (chat and report) endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import FastAPI

from ..dependencies import get_coach, get_tracker, serialize_message
from ..schemas import (
    CoachChatRequest,
    CoachChatResponse,
    CoachMessage,
    CoachReportRequest,
    CoachReportResponse,
)

logger = logging.getLogger(__name__)


def register_coach_routes(app: FastAPI) -> None:
    """Register coach endpoints.

    Model calls run in a worker thread so tracker endpoints stay responsive
    while a reply is outstanding. The coach converts model failures into
    placeholder text, so these routes do not map them to HTTP errors.
    """

    @app.post("/api/coach/chat", response_model=CoachChatResponse)
    async def chat(request: CoachChatRequest) -> CoachChatResponse:
        """Send a message to the coach with the recent logs as context."""
        tracker = get_tracker()
        coach = get_coach()
        logs = tracker.snapshot()
        user = await asyncio.to_thread(tracker.get_user)
        reply = await asyncio.to_thread(coach.chat, request.message, logs, user)
        return CoachChatResponse(
            reply=serialize_message(reply),
            history=[serialize_message(m) for m in coach.history],
        )

    @app.get("/api/coach/history", response_model=List[CoachMessage])
    async def get_history() -> List[CoachMessage]:
        """Return the in-memory conversation."""
        return [serialize_message(m) for m in get_coach().history]

    @app.post("/api/coach/report", response_model=CoachReportResponse)
    async def report(request: CoachReportRequest) -> CoachReportResponse:
        """Generate a report for the selected range."""
        tracker = get_tracker()
        coach = get_coach()
        logs = tracker.snapshot()
        user = await asyncio.to_thread(tracker.get_user)
        text = await asyncio.to_thread(
            coach.generate_report, logs, request.range, user.name if user else None
        )
        return CoachReportResponse(range=request.range, report=text)

    @app.post("/api/coach/reset", response_model=List[CoachMessage])
    async def reset() -> List[CoachMessage]:
        """Clear the conversation and return the (empty) history."""
        coach = get_coach()
        coach.reset()
        return []
