"""Daily tracker endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import FastAPI, HTTPException

from src.routine_log.analytics import TimeRange, build_chart_data, summarize

from ..dependencies import get_tracker, serialize_log, serialize_today
from ..schemas import AnalyticsResponse, DailyLogResponse, DetailsUpdateRequest, TodayResponse

logger = logging.getLogger(__name__)


def register_tracker_routes(app: FastAPI) -> None:
    """Register today/toggle/details/history endpoints."""

    @app.get("/api/tracker/today", response_model=TodayResponse)
    async def get_today() -> TodayResponse:
        """Return today's log with greeting and progress."""
        tracker = get_tracker()
        try:
            log = await asyncio.to_thread(tracker.current_log)
            user = await asyncio.to_thread(tracker.get_user)
            return serialize_today(log, user)
        except Exception as exc:
            logger.exception("Failed to load today's log: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to load today's log") from exc

    @app.post("/api/tracker/activities/{activity_id}/toggle", response_model=DailyLogResponse)
    async def toggle_activity(activity_id: str) -> DailyLogResponse:
        """Flip the completed flag of one of today's activities."""
        tracker = get_tracker()
        try:
            log = await asyncio.to_thread(tracker.toggle, activity_id)
            if log is None:
                raise HTTPException(status_code=404, detail="Activity not found")
            return serialize_log(log)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to toggle activity %s: %s", activity_id, exc)
            raise HTTPException(status_code=500, detail="Failed to toggle activity") from exc

    @app.put("/api/tracker/activities/{activity_id}/details", response_model=DailyLogResponse)
    async def update_details(activity_id: str, request: DetailsUpdateRequest) -> DailyLogResponse:
        """Replace the details text of one of today's activities."""
        tracker = get_tracker()
        try:
            log = await asyncio.to_thread(tracker.update_details, activity_id, request.details)
            if log is None:
                raise HTTPException(status_code=404, detail="Activity not found")
            return serialize_log(log)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to update details for %s: %s", activity_id, exc)
            raise HTTPException(status_code=500, detail="Failed to update details") from exc

    @app.get("/api/tracker/logs", response_model=List[DailyLogResponse])
    async def list_logs(days: int = 30) -> List[DailyLogResponse]:
        """List the most recent logs in date order."""
        tracker = get_tracker()
        return [serialize_log(log) for log in tracker.snapshot().recent(days)]

    @app.get("/api/tracker/analytics", response_model=AnalyticsResponse)
    async def get_analytics(range: TimeRange = TimeRange.WEEK) -> AnalyticsResponse:
        """Return chart points and totals for the selected range."""
        collection = get_tracker().snapshot()
        return AnalyticsResponse(
            range=range,
            summary=summarize(collection, range),
            points=build_chart_data(collection, range),
        )
