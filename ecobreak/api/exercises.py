"""Exercise catalogue API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.exercise import Exercise
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.services.exercise_service import ExerciseService

router = APIRouter(
    prefix="/admin/exercises",
    tags=["exercises"],
    dependencies=[Depends(get_current_user)],
)


class ExerciseCreateRequest(BaseModel):
    """Exercise creation request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nombre: str = Field(..., min_length=1)
    duracion: str | int | None = None
    descripcion: str | None = None
    pasos: list[str] = Field(default_factory=list)
    icono: str | None = None
    video_url: str | None = None
    sensor_enabled: bool = False


class ExerciseUpdateRequest(BaseModel):
    """Exercise update request. Omitted or empty fields are left unchanged."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    nombre: str | None = None
    duracion: str | int | None = None
    descripcion: str | None = None
    pasos: list[str] | None = None
    icono: str | None = None
    video_url: str | None = None
    sensor_enabled: bool | None = None


class ExerciseRef(BaseModel):
    activity_id: str = Field(..., alias="activityId")


def get_exercise_service(request: Request | None = None) -> ExerciseService:
    """Create an ExerciseService for the request."""
    return ExerciseService(ExerciseRepository(get_firestore(request)))


@router.post("", status_code=201)
async def create_exercise(request: Request, body: ExerciseCreateRequest) -> dict[str, Any]:
    exercise = get_exercise_service(request).create_exercise(
        Exercise(**body.model_dump())
    )
    return success(exercise, "Ejercicio creado exitosamente")


@router.get("")
async def list_exercises(request: Request) -> dict[str, Any]:
    return success(get_exercise_service(request).list_exercises(), "Ejercicios obtenidos")


@router.put("/{exercise_id}")
async def update_exercise(
    request: Request, exercise_id: str, body: ExerciseUpdateRequest
) -> dict[str, Any]:
    """Update the provided fields of an exercise.

    Args:
        request: FastAPI request
        exercise_id: Exercise ID
        body: Fields to change

    Returns:
        The updated exercise.
    """
    changes = body.model_dump(by_alias=True, exclude_none=True)
    exercise = get_exercise_service(request).update_exercise(exercise_id, changes)
    return success(exercise, "Ejercicio actualizado exitosamente")


@router.delete("/{exercise_id}")
async def delete_exercise(request: Request, exercise_id: str) -> dict[str, Any]:
    get_exercise_service(request).delete_exercise(exercise_id)
    return success({"id": exercise_id}, "Ejercicio eliminado exitosamente")


@router.post("/getActivitiesUser")
async def get_activities_user(request: Request, body: list[ExerciseRef]) -> dict[str, Any]:
    """Exercises by ID, in request order."""
    exercises = get_exercise_service(request).get_exercises_by_ids(
        [ref.activity_id for ref in body]
    )
    return success(exercises, "Ejercicios obtenidos")
