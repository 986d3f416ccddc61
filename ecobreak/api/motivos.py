"""Motivo API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.motivo import Motivo, MotivoResponse
from ecobreak.repositories.motivo_repo import MotivoRepository, MotivoResponseRepository
from ecobreak.services.motivo_service import MotivoService

router = APIRouter(
    prefix="/admin/motivos",
    tags=["motivos"],
    dependencies=[Depends(get_current_user)],
)


class MotivoCreateRequest(BaseModel):
    titulo: str = Field(..., min_length=1)
    descripcion: str | None = None
    estado: bool = True


class MotivoUpdateRequest(BaseModel):
    titulo: str | None = None
    descripcion: str | None = None
    estado: bool | None = None


class ComentarioRequest(BaseModel):
    id_user: str = Field(..., alias="idUser", min_length=1)
    username: str | None = None
    motivo: str = Field(..., min_length=1)


def get_motivo_service(request: Request | None = None) -> MotivoService:
    """Create a MotivoService for the request."""
    firestore = get_firestore(request)
    return MotivoService(MotivoRepository(firestore), MotivoResponseRepository(firestore))


@router.get("")
async def list_motivos(request: Request) -> dict[str, Any]:
    return success(get_motivo_service(request).list_motivos(), "Motivos obtenidos")


@router.post("", status_code=201)
async def create_motivo(request: Request, body: MotivoCreateRequest) -> dict[str, Any]:
    motivo = get_motivo_service(request).create_motivo(Motivo(**body.model_dump()))
    return success(motivo, "Motivo creado exitosamente")


@router.get("/active")
async def list_active(request: Request) -> dict[str, Any]:
    return success(get_motivo_service(request).list_active(), "Motivos activos obtenidos")


@router.post("/comentarios", status_code=201)
async def add_comentario(request: Request, body: ComentarioRequest) -> dict[str, Any]:
    """Store a user's answer."""
    response = get_motivo_service(request).add_response(MotivoResponse(**body.model_dump()))
    return success(response, "Comentario guardado exitosamente")


@router.get("/comentarios")
async def list_comentarios(request: Request) -> dict[str, Any]:
    return success(get_motivo_service(request).list_responses(), "Comentarios obtenidos")


@router.put("/{motivo_id}")
async def update_motivo(request: Request, motivo_id: str, body: MotivoUpdateRequest) -> dict[str, Any]:
    motivo = get_motivo_service(request).update_motivo(
        motivo_id, body.model_dump(exclude_none=True)
    )
    return success(motivo, "Motivo actualizado exitosamente")


@router.delete("/{motivo_id}")
async def delete_motivo(request: Request, motivo_id: str) -> dict[str, Any]:
    get_motivo_service(request).delete_motivo(motivo_id)
    return success({"id": motivo_id}, "Motivo eliminado exitosamente")
