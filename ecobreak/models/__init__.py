"""Domain models for EcoBreak.

This module exports all Pydantic models used across the application.
"""

from ecobreak.models.activity import Activity, ActivityCategory, ActivityType
from ecobreak.models.base import FirestoreModel, utc_now_iso, utc_today
from ecobreak.models.category import (
    Category,
    CategoryExercise,
    CategoryHistory,
    CategoryWithExercises,
)
from ecobreak.models.exercise import Exercise
from ecobreak.models.history import ExerciseHistory
from ecobreak.models.motivo import Motivo, MotivoResponse
from ecobreak.models.notification import (
    Device,
    NotificationPause,
    NotificationPlan,
    ScheduledPlan,
)
from ecobreak.models.plan import Plan, PlanActivity
from ecobreak.models.process_group import (
    AssignedProcess,
    AssignmentStatus,
    ProcessGroup,
)
from ecobreak.models.user import Identity, Role, UserProfile

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityType",
    "AssignedProcess",
    "AssignmentStatus",
    "Category",
    "CategoryExercise",
    "CategoryHistory",
    "CategoryWithExercises",
    "Device",
    "Exercise",
    "ExerciseHistory",
    "FirestoreModel",
    "Identity",
    "Motivo",
    "MotivoResponse",
    "NotificationPause",
    "NotificationPlan",
    "Plan",
    "PlanActivity",
    "ProcessGroup",
    "Role",
    "ScheduledPlan",
    "UserProfile",
    "utc_now_iso",
    "utc_today",
]
