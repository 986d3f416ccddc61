"""Notification pause settings API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.notification import NotificationPause
from ecobreak.repositories.notification_repo import NotificationPauseRepository
from ecobreak.services.notification_pause_service import NotificationPauseService

router = APIRouter(
    prefix="/user/notification-pauses",
    tags=["notification-pauses"],
    dependencies=[Depends(get_current_user)],
)

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class PauseCreateRequest(BaseModel):
    """Pause settings of a user."""

    id_user: str = Field(..., alias="idUser", min_length=1)
    date_start: str = Field(..., alias="dateStart", pattern=HHMM_PATTERN)
    date_end: str = Field(..., alias="dateEnd", pattern=HHMM_PATTERN)
    notifi_active: bool = Field(True, alias="notifiActive")
    notifi_pause_active: bool = Field(True, alias="notifiPauseActive")
    frecuencia: int = Field(0, ge=0)


class PauseUpdateRequest(BaseModel):
    date_start: str | None = Field(None, alias="dateStart", pattern=HHMM_PATTERN)
    date_end: str | None = Field(None, alias="dateEnd", pattern=HHMM_PATTERN)
    notifi_active: bool | None = Field(None, alias="notifiActive")
    notifi_pause_active: bool | None = Field(None, alias="notifiPauseActive")
    frecuencia: int | None = Field(None, ge=0)


def get_notification_pause_service(request: Request | None = None) -> NotificationPauseService:
    """Create a NotificationPauseService for the request."""
    return NotificationPauseService(NotificationPauseRepository(get_firestore(request)))


@router.post("", status_code=201)
async def create_pause(request: Request, body: PauseCreateRequest) -> dict[str, Any]:
    pause = get_notification_pause_service(request).create(NotificationPause(**body.model_dump()))
    return success(pause, "Configuración de pausas creada exitosamente")


@router.put("/{user_id}")
async def update_pause(request: Request, user_id: str, body: PauseUpdateRequest) -> dict[str, Any]:
    """Update the pause settings of a user."""
    pause = get_notification_pause_service(request).update_for_user(
        user_id, body.model_dump(by_alias=True, exclude_none=True)
    )
    return success(pause, "Configuración de pausas actualizada exitosamente")


@router.get("/{user_id}")
async def list_pauses(request: Request, user_id: str) -> dict[str, Any]:
    pauses = get_notification_pause_service(request).list_for_user(user_id)
    return success(pauses, "Configuración de pausas obtenida")
