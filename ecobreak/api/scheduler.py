"""Scheduler endpoints for Cloud Scheduler triggers.

Internal endpoints called by Cloud Scheduler every 5 minutes. The
/internal/* paths are protected by Cloud Run IAM + OIDC tokens.
"""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request

from ecobreak.api.dependencies import get_app_settings, get_firestore, get_messaging_client
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.notification_repo import (
    NotificationPauseRepository,
    NotificationPlanRepository,
)
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.user_repo import DeviceRepository, UserRepository
from ecobreak.services.notification_dispatcher import NotificationDispatcher, day_key
from ecobreak.services.notification_plan_service import NotificationPlanService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/internal", tags=["scheduler"])


def get_notification_dispatcher(request: Request | None = None) -> NotificationDispatcher:
    """Create a NotificationDispatcher.

    Args:
        request: FastAPI request (for app.state access)

    Returns:
        NotificationDispatcher instance
    """
    firestore = get_firestore(request)
    notification_plan_repo = NotificationPlanRepository(firestore)
    return NotificationDispatcher(
        settings=get_app_settings(request),
        messaging=get_messaging_client(request),
        notification_plan_repo=notification_plan_repo,
        pause_repo=NotificationPauseRepository(firestore),
        user_repo=UserRepository(firestore),
        device_repo=DeviceRepository(firestore),
        exercise_repo=ExerciseRepository(firestore),
        notification_plan_service=NotificationPlanService(
            notification_plan_repo, PlanRepository(firestore)
        ),
    )


@router.post("/notifications/dispatch")
async def dispatch_notifications(request: Request) -> dict[str, Any]:
    """Send plan and activity reminders and expire finished schedules.

    Returns:
        Run counters (plan_reminders, notifications_sent, plans_expired,
        activity_reminders)
    """
    try:
        result = get_notification_dispatcher(request).run()
        return {"status": "success", "result": result.to_dict()}
    except Exception as e:
        logger.error("notification_dispatch_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Notification dispatch failed: {e}",
        ) from e


@router.post("/notifications/cleanup")
async def cleanup_notification_plans(request: Request) -> dict[str, Any]:
    """Delete schedules whose end date has passed.

    Returns:
        Number of deleted schedules
    """
    dispatcher = get_notification_dispatcher(request)
    try:
        deleted = dispatcher.notification_plan_service.cleanup_expired(day_key(dispatcher.now()))
        return {"status": "success", "result": {"deleted": deleted}}
    except Exception as e:
        logger.error("notification_cleanup_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Notification cleanup failed: {e}",
        ) from e
