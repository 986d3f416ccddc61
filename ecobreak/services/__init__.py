"""Business logic services."""

from ecobreak.services.activity_service import ActivityService, VideoValidator
from ecobreak.services.admin_service import AdminService
from ecobreak.services.category_service import CategoryService
from ecobreak.services.drive_service import DriveService
from ecobreak.services.exercise_history_service import ExerciseHistoryService
from ecobreak.services.exercise_service import ExerciseService
from ecobreak.services.identity_service import IdentityService
from ecobreak.services.motivo_service import MotivoService
from ecobreak.services.notification_dispatcher import DispatchResult, NotificationDispatcher
from ecobreak.services.notification_pause_service import NotificationPauseService
from ecobreak.services.notification_plan_service import NotificationPlanService
from ecobreak.services.pause_history_service import PauseHistoryService
from ecobreak.services.plan_service import PlanService
from ecobreak.services.process_group_service import ProcessGroupService
from ecobreak.services.process_service import ProcessService
from ecobreak.services.user_service import UserService

__all__ = [
    "ActivityService",
    "AdminService",
    "CategoryService",
    "DispatchResult",
    "DriveService",
    "ExerciseHistoryService",
    "ExerciseService",
    "IdentityService",
    "MotivoService",
    "NotificationDispatcher",
    "NotificationPauseService",
    "NotificationPlanService",
    "PauseHistoryService",
    "PlanService",
    "ProcessGroupService",
    "ProcessService",
    "UserService",
    "VideoValidator",
]
