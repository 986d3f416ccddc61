"""Notification plan API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, field_validator

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.notification import (
    DATE_PATTERN,
    NotificationPlan,
    ScheduledPlan,
    to_day_key,
)
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.notification_plan_service import NotificationPlanService

router = APIRouter(
    prefix="/admin/notification-plans",
    tags=["notification-plans"],
    dependencies=[Depends(get_current_user)],
)

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class NotificationPlanRequest(BaseModel):
    """Notification plan creation request."""

    name: str = Field(..., min_length=1)
    start_date: str = Field(..., alias="startDate", pattern=DATE_PATTERN)
    end_date: str = Field(..., alias="endDate", pattern=DATE_PATTERN)
    time: str = Field(..., pattern=HHMM_PATTERN)
    time_second: str | None = Field(None, alias="timeSecond", pattern=HHMM_PATTERN)
    assigned_plans: dict[str, list[ScheduledPlan]] = Field(
        default_factory=dict, alias="assignedPlans"
    )
    is_active: bool = Field(True, alias="isActive")

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_day_key(cls, value: str) -> str:
        return to_day_key(value)


class StatusRequest(BaseModel):
    is_active: bool = Field(..., alias="isActive")


def get_notification_plan_service(request: Request | None = None) -> NotificationPlanService:
    """Create a NotificationPlanService for the request."""
    firestore = get_firestore(request)
    return NotificationPlanService(NotificationPlanRepository(firestore), PlanRepository(firestore))


@router.post("", status_code=201)
async def create_notification_plan(
    request: Request, body: NotificationPlanRequest
) -> dict[str, Any]:
    """Create a schedule and activate the plans it references."""
    notification_plan = get_notification_plan_service(request).create(
        NotificationPlan(**body.model_dump())
    )
    return success(notification_plan, "Plan de notificaciones creado exitosamente")


@router.get("")
async def list_notification_plans(request: Request) -> dict[str, Any]:
    plans = get_notification_plan_service(request).list_plans()
    return success(plans, "Planes de notificaciones obtenidos")


@router.put("/{notification_plan_id}/status")
async def update_status(
    request: Request, notification_plan_id: str, body: StatusRequest
) -> dict[str, Any]:
    notification_plan = get_notification_plan_service(request).update_status(
        notification_plan_id, body.is_active
    )
    return success(notification_plan, "Estado actualizado exitosamente")


@router.delete("/{notification_plan_id}")
async def delete_notification_plan(request: Request, notification_plan_id: str) -> dict[str, Any]:
    get_notification_plan_service(request).delete(notification_plan_id)
    return success({"id": notification_plan_id}, "Plan de notificaciones eliminado exitosamente")
