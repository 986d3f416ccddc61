"""Repository layer for Firestore data access.

This module exports all repository classes for data persistence.
"""

from ecobreak.repositories.activity_repo import ActivityRepository
from ecobreak.repositories.base import BaseRepository
from ecobreak.repositories.category_repo import (
    CategoryExerciseRepository,
    CategoryHistoryRepository,
    CategoryRepository,
)
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.motivo_repo import MotivoRepository, MotivoResponseRepository
from ecobreak.repositories.notification_repo import (
    NotificationPauseRepository,
    NotificationPlanRepository,
)
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import (
    AssignedProcessRepository,
    ProcessGroupRepository,
)
from ecobreak.repositories.user_repo import DeviceRepository, UserRepository

__all__ = [
    "ActivityRepository",
    "AssignedProcessRepository",
    "BaseRepository",
    "CategoryExerciseRepository",
    "CategoryHistoryRepository",
    "CategoryRepository",
    "DeviceRepository",
    "ExerciseHistoryRepository",
    "ExerciseRepository",
    "MotivoRepository",
    "MotivoResponseRepository",
    "NotificationPauseRepository",
    "NotificationPlanRepository",
    "PlanRepository",
    "ProcessGroupRepository",
    "UserRepository",
]
