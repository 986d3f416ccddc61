"""User profile, registration and statistics API endpoints."""

import re
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, EmailStr, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_auth_client, get_firestore
from ecobreak.api.responses import success
from ecobreak.models.user import Identity
from ecobreak.repositories.category_repo import CategoryExerciseRepository
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.exceptions import BadRequestError
from ecobreak.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["users"])
admin_router = APIRouter(
    prefix="/admin/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class RegisterRequest(BaseModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    last_name: str = Field(..., alias="lastName", min_length=1)
    gender: str | None = None
    avatar_color: str | None = Field(None, alias="avatarColor")
    telefono: str | None = None


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class ProfileUpdateRequest(BaseModel):
    """Profile update request. Omitted fields are left unchanged."""

    name: str | None = None
    last_name: str | None = Field(None, alias="lastName")
    gender: str | None = None
    avatar_color: str | None = Field(None, alias="avatarColor")
    telefono: str | None = None
    email: EmailStr | None = None


class StatsUpdateRequest(BaseModel):
    num_activities: int | None = Field(None, alias="numActivities", ge=0)
    num_time_in_app: int | None = Field(None, alias="numTimeInApp", ge=0)


def get_user_service(request: Request | None = None) -> UserService:
    """Create a UserService for the request."""
    firestore = get_firestore(request)
    return UserService(
        user_repo=UserRepository(firestore),
        auth_client=get_auth_client(request),
        notification_plan_repo=NotificationPlanRepository(firestore),
        plan_repo=PlanRepository(firestore),
        link_repo=CategoryExerciseRepository(firestore),
        history_repo=ExerciseHistoryRepository(firestore),
    )


@router.post("/register", status_code=201)
async def register(request: Request, body: RegisterRequest) -> dict[str, Any]:
    """Create a Firebase Auth user and its profile.

    Returns:
        The created profile.
    """
    profile = get_user_service(request).register(
        email=str(body.email),
        password=body.password,
        name=body.name,
        last_name=body.last_name,
        gender=body.gender,
        avatar_color=body.avatar_color,
        telefono=body.telefono,
    )
    return success(profile, "Usuario registrado exitosamente")


@router.post("/reset-password")
async def reset_password(request: Request, body: ResetPasswordRequest) -> dict[str, Any]:
    get_user_service(request).send_password_reset(str(body.email))
    return success(None, "Se envió el enlace para restablecer la contraseña")


@router.get("/profile")
async def get_profile(request: Request, user: Identity = Depends(get_current_user)) -> dict[str, Any]:
    return success(get_user_service(request).get_profile(user.uid), "Perfil obtenido")


@router.patch("/profile")
async def update_profile(
    request: Request,
    body: ProfileUpdateRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """Merge profile changes; a new email is also applied in Firebase Auth."""
    changes = body.model_dump(by_alias=True, exclude_none=True)
    profile = get_user_service(request).update_profile(user.uid, changes)
    return success(profile, "Perfil actualizado exitosamente")


@router.patch("/stats")
async def update_stats(
    request: Request,
    body: StatsUpdateRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    get_user_service(request).update_stats(user.uid, body.num_activities, body.num_time_in_app)
    return success(None, "Estadísticas actualizadas exitosamente")


@router.patch("/notification-settings")
async def update_notification_settings(
    request: Request,
    body: dict[str, Any],
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    get_user_service(request).update_notification_settings(user.uid, body)
    return success(None, "Configuración de notificaciones actualizada")


@router.get("/{user_id}/stats", dependencies=[Depends(get_current_user)])
async def get_stats(
    request: Request,
    user_id: str,
    date: str = Query(..., description="Day as YYYY-MM-DD"),
) -> dict[str, Any]:
    """Completion statistics of a user up to the end of a day."""
    if not DATE_PATTERN.match(date):
        raise BadRequestError("La fecha debe tener el formato YYYY-MM-DD")
    return success(get_user_service(request).get_stats(user_id, date), "Estadísticas obtenidas")


@admin_router.get("/stats/all")
async def get_all_stats(request: Request) -> dict[str, Any]:
    return success(get_user_service(request).get_all_stats(), "Estadísticas obtenidas")
