"""Daily routine log: models, reconciliation and persistence shared by the CLI and server."""

from .models import (
    ActivityDefinition,
    ActivityRecord,
    ActivityType,
    DailyLog,
    LogCollection,
    UserProfile,
)
from .mutations import set_activity_details, toggle_activity
from .reconciler import local_today_str, reconcile
from .repository import KeyValueStore, RoutineLogRepository
from .schema import DEFAULT_SCHEMA, load_schema
from .tracker import RoutineTracker

__all__ = [
    "ActivityDefinition",
    "ActivityRecord",
    "ActivityType",
    "DailyLog",
    "LogCollection",
    "UserProfile",
    "DEFAULT_SCHEMA",
    "KeyValueStore",
    "RoutineLogRepository",
    "RoutineTracker",
    "load_schema",
    "local_today_str",
    "reconcile",
    "set_activity_details",
    "toggle_activity",
]
