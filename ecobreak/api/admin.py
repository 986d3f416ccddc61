"""Admin login and user directory API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_app_settings, get_auth_client, get_firestore
from ecobreak.api.responses import success
from ecobreak.models.base import utc_now_iso
from ecobreak.models.user import Identity
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


def get_admin_service(request: Request | None = None) -> AdminService:
    """Create an AdminService for the request."""
    return AdminService(
        settings=get_app_settings(request),
        auth_client=get_auth_client(request),
        user_repo=UserRepository(get_firestore(request)),
    )


@router.post("/login")
async def login(request: Request, body: LoginRequest) -> dict[str, Any]:
    """Exchange admin credentials for a Firebase custom token.

    Returns:
        Session payload with the token.
    """
    session = get_admin_service(request).login(body.email, body.password)
    return success(session, "Login exitoso")


@router.get("")
async def admin_access(user: Identity = Depends(get_current_user)) -> dict[str, Any]:
    return success(user, "Acceso autorizado")


@router.get("/check")
async def check() -> dict[str, Any]:
    return success({"timestamp": utc_now_iso()}, "Admin API disponible")


@router.get("/health")
async def health() -> dict[str, Any]:
    return success({"status": "ok", "timestamp": utc_now_iso()}, "Admin API saludable")


@router.get("/users", dependencies=[Depends(get_current_user)])
async def list_users(request: Request) -> dict[str, Any]:
    """Every Firebase Auth user joined with its profile."""
    return success(get_admin_service(request).list_users(), "Usuarios obtenidos")
