"""Activity catalogue API endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_app_settings, get_drive_client, get_firestore
from ecobreak.api.responses import success
from ecobreak.models.activity import Activity, ActivityCategory, ActivityType
from ecobreak.models.user import Identity
from ecobreak.repositories.activity_repo import ActivityRepository
from ecobreak.services.activity_service import ActivityService, VideoValidator

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/admin/activities",
    tags=["activities"],
    dependencies=[Depends(get_current_user)],
)


class ActivityCreateRequest(BaseModel):
    """Activity creation request."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    type: ActivityType
    video_url: str = Field(..., alias="videoUrl", min_length=1)
    duration: int = Field(300, gt=0)
    min_time: int = Field(15, alias="minTime", ge=0)
    max_time: int = Field(30, alias="maxTime", gt=0)
    category: ActivityCategory = ActivityCategory.ESTIRAMIENTOS_GENERALES
    sensor_enabled: bool = Field(False, alias="sensorEnabled")


def get_activity_service(request: Request | None = None) -> ActivityService:
    """Create an ActivityService for the request."""
    settings = get_app_settings(request)
    validator = VideoValidator(get_drive_client(request), settings.DRIVE_VIDEO_FOLDER_IDS)
    return ActivityService(ActivityRepository(get_firestore(request)), validator)


@router.post("", status_code=201)
async def create_activity(
    request: Request,
    body: ActivityCreateRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """Create an activity backed by a validated video.

    Returns:
        The created activity.
    """
    activity = Activity(
        name=body.name,
        description=body.description,
        type=body.type.value,
        video_url=body.video_url,
        duration=body.duration,
        min_time=body.min_time,
        max_time=body.max_time,
        category=body.category.value,
        sensor_enabled=body.sensor_enabled,
        created_by=user.uid,
    )
    created = get_activity_service(request).create_activity(activity)
    return success(created, "Actividad creada exitosamente")


@router.get("")
async def list_activities(request: Request) -> dict[str, Any]:
    activities = get_activity_service(request).list_activities()
    return success(activities, "Actividades obtenidas exitosamente")


@router.delete("/{activity_id}")
async def delete_activity(request: Request, activity_id: str) -> dict[str, Any]:
    get_activity_service(request).delete_activity(activity_id)
    return success({"id": activity_id}, "Actividad eliminada exitosamente")
