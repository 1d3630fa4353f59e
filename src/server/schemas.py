"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from src.routine_log.analytics import TimeRange
from src.routine_log.models import ActivityType


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class ActivityResponse(BaseModel):
    """Serialized activity record."""

    id: str
    label: str
    type: ActivityType
    completed: bool
    details: str
    placeholder: str
    icon: str

    class Config:
        use_enum_values = True


class DailyLogResponse(BaseModel):
    """Serialized daily log with progress counters."""

    date: str
    completed_count: int
    total_count: int
    progress_percent: float
    activities: List[ActivityResponse]


class TodayResponse(DailyLogResponse):
    """Today's log plus greeting text for the tracker screen."""

    greeting: str
    user_name: Optional[str] = None


class DetailsUpdateRequest(BaseModel):
    """Request body for updating activity details."""

    details: str = Field(default="", max_length=2000)


class AnalyticsPoint(BaseModel):
    """Single chart point (daily or monthly)."""

    date: Optional[str] = None
    month: Optional[str] = None
    completed: int
    total: Optional[int] = None
    percent: float


class AnalyticsSummary(BaseModel):
    """Totals for the selected range."""

    days: int
    total_completed: int
    total_workouts: int


class AnalyticsResponse(BaseModel):
    """Response for analytics endpoint."""

    range: TimeRange
    summary: AnalyticsSummary
    points: List[AnalyticsPoint]

    class Config:
        use_enum_values = True


class UserProfileModel(BaseModel):
    """User profile stored on login."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=320)
    photo_url: Optional[str] = Field(default=None)


class UserResponse(BaseModel):
    """Current user (None when logged out)."""

    user: Optional[UserProfileModel] = None


class CoachChatRequest(BaseModel):
    """Request body for coach chat endpoint."""

    message: str = Field(..., min_length=1, description="User message to send to the coach")


class CoachMessage(BaseModel):
    """Single chat message."""

    id: str
    role: str
    text: str
    timestamp: float


class CoachChatResponse(BaseModel):
    """Response body for coach chat endpoint."""

    reply: CoachMessage
    history: List[CoachMessage]


class CoachReportRequest(BaseModel):
    """Request body for coach report endpoint."""

    range: TimeRange = Field(default=TimeRange.WEEK)


class CoachReportResponse(BaseModel):
    """Generated report text (Markdown, passed through as-is)."""

    range: TimeRange
    report: str

    class Config:
        use_enum_values = True
