"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from src.routine_coach.coach import ChatMessage, RoutineCoach
from src.routine_coach.config import Config
from src.routine_coach.logger import setup_logger
from src.routine_coach.ollama_client import OllamaClient
from src.routine_coach.prompt_templates import greeting_for_hour
from src.routine_log import DailyLog, RoutineLogRepository, RoutineTracker, UserProfile, load_schema

from .schemas import ActivityResponse, CoachMessage, DailyLogResponse, TodayResponse, UserProfileModel

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_tracker() -> RoutineTracker:
    """Lazily create the singleton RoutineTracker and start its day-check loop."""
    repository = RoutineLogRepository(
        db_path=Path(config.storage.db_path) if config.storage.db_path else None
    )
    schema = load_schema(Path(config.storage.schema_file) if config.storage.schema_file else None)
    tracker = RoutineTracker(
        repository,
        schema=schema,
        check_interval_seconds=config.day_check.interval_seconds,
    )
    tracker.initialize()
    return tracker


@lru_cache(maxsize=1)
def get_coach() -> RoutineCoach:
    """Lazily create a singleton RoutineCoach instance."""
    client = OllamaClient(
        host=config.ollama.host,
        model=config.ollama.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
    return RoutineCoach(
        client,
        context_days=config.context_days,
        history_limit=config.history_limit,
    )


def shutdown_tracker() -> None:
    """Stop the day-check loop if the tracker was created."""
    if get_tracker.cache_info().currsize:
        get_tracker().shutdown()
    get_tracker.cache_clear()


def serialize_log(log: DailyLog) -> DailyLogResponse:
    """Convert domain DailyLog to API response."""
    return DailyLogResponse(
        date=log.date,
        completed_count=log.completed_count,
        total_count=log.total_count,
        progress_percent=log.progress_percent,
        activities=[ActivityResponse(**activity.to_dict()) for activity in log.activities],
    )


def serialize_today(log: DailyLog, user: Optional[UserProfile], hour: Optional[int] = None) -> TodayResponse:
    """Build the tracker screen payload."""
    base = serialize_log(log)
    return TodayResponse(
        **base.model_dump(),
        greeting=greeting_for_hour(hour),
        user_name=user.first_name if user else None,
    )


def serialize_user(profile: UserProfile) -> UserProfileModel:
    return UserProfileModel(name=profile.name, email=profile.email, photo_url=profile.photo_url)


def serialize_message(message: ChatMessage) -> CoachMessage:
    return CoachMessage(**message.to_dict())
