"""Public authentication API endpoints."""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_identity_service
from ecobreak.api.responses import success
from ecobreak.api.users import RegisterRequest, get_user_service

router = APIRouter(prefix="/auth", tags=["auth"])


class VerifyRequest(BaseModel):
    token: str = Field(..., min_length=1)


@router.post("/register", status_code=201)
async def register(request: Request, body: RegisterRequest) -> dict[str, Any]:
    """Same contract as ``POST /user/register``."""
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


@router.post("/verify")
async def verify(request: Request, body: VerifyRequest) -> dict[str, Any]:
    """Verify an ID token and return the identity behind it."""
    identity = get_identity_service(request).resolve(body.token)
    return success(identity, "Token válido")
