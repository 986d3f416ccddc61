"""Exercise history API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.history import ExerciseHistory
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.exercise_history_service import ExerciseHistoryService

router = APIRouter(
    prefix="/user/exercise-history",
    tags=["exercise-history"],
    dependencies=[Depends(get_current_user)],
)


class HistoryCreateRequest(BaseModel):
    """A completed exercise."""

    id_usuario: str = Field(..., alias="idUsuario", min_length=1)
    id_grupo: str | None = Field(None, alias="idGrupo")
    id_plan: str | None = Field(None, alias="idPlan")
    id_ejercicio: str | None = Field(None, alias="idEjercicio")
    id_categoria: str | None = Field(None, alias="idCategoria")
    nombre: str | None = None
    categoria: str | None = None
    tiempo: float = Field(0, ge=0)
    repeticiones: int = Field(0, ge=0)
    sensor_enabled: bool = Field(False, alias="sensorEnabled")
    estado: str | None = None


class HistoryByUserRequest(BaseModel):
    user_id: str = Field(..., alias="userId")
    plan: str
    grupo: str


def get_exercise_history_service(request: Request | None = None) -> ExerciseHistoryService:
    """Create an ExerciseHistoryService for the request."""
    firestore = get_firestore(request)
    return ExerciseHistoryService(ExerciseHistoryRepository(firestore), PlanRepository(firestore))


@router.post("", status_code=201)
async def create_history(request: Request, body: HistoryCreateRequest) -> dict[str, Any]:
    record = get_exercise_history_service(request).create(ExerciseHistory(**body.model_dump()))
    return success(record, "Historial creado exitosamente")


@router.post("/by-user")
async def exercises_done_today(request: Request, body: HistoryByUserRequest) -> dict[str, Any]:
    """Exercise IDs recorded today for a user, plan and group."""
    exercise_ids = get_exercise_history_service(request).exercises_done_today(
        body.user_id, body.plan, body.grupo
    )
    return success(exercise_ids, "Historial obtenido")


@router.get("/{user_id}/exercises")
async def summarize(
    request: Request,
    user_id: str,
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
) -> dict[str, Any]:
    """History of a user grouped by day and by category."""
    summary = get_exercise_history_service(request).summarize(user_id, start_date, end_date)
    return success(summary, "Historial obtenido")


@router.get("/{user_id}/history")
async def recent_history(request: Request, user_id: str) -> dict[str, Any]:
    return success(get_exercise_history_service(request).recent(user_id), "Historial obtenido")
