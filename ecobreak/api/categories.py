"""Category API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.category import Category
from ecobreak.models.user import Identity
from ecobreak.repositories.category_repo import (
    CategoryExerciseRepository,
    CategoryHistoryRepository,
    CategoryRepository,
)
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.category_service import CategoryService

router = APIRouter(
    prefix="/admin/categorias",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)


class CategoryActivity(BaseModel):
    actividad_id: str = Field("", alias="actividadId")


class CategoryCreateRequest(BaseModel):
    """Category creation request."""

    nombre: str = Field(..., min_length=1)
    descripcion: str | None = None
    color: str | int | None = None
    status: bool | str = True
    activities: list[CategoryActivity] = Field(default_factory=list)


class CategoryUpdateRequest(BaseModel):
    """Category update request."""

    nombre: str | None = None
    descripcion: str | None = None
    color: str | int | None = None
    status: bool | str | None = None
    activities: list[CategoryActivity] | None = None


class IdRequest(BaseModel):
    id: str


class IdsRequest(BaseModel):
    ids: list[str]


def get_category_service(request: Request | None = None) -> CategoryService:
    """Create a CategoryService for the request."""
    firestore = get_firestore(request)
    return CategoryService(
        category_repo=CategoryRepository(firestore),
        link_repo=CategoryExerciseRepository(firestore),
        exercise_repo=ExerciseRepository(firestore),
        plan_repo=PlanRepository(firestore),
        notification_plan_repo=NotificationPlanRepository(firestore),
        history_repo=CategoryHistoryRepository(firestore),
    )


@router.post("", status_code=201)
async def create_category(
    request: Request,
    body: CategoryCreateRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """Create a category linked to its exercises.

    Returns:
        The category with its exercises.
    """
    category = Category(
        nombre=body.nombre,
        descripcion=body.descripcion,
        color=body.color,
        status=body.status,
        created_by=user.uid,
    )
    created = get_category_service(request).create_category(
        category, [activity.actividad_id for activity in body.activities]
    )
    return success(created, "Categoría creada exitosamente")


@router.get("")
async def list_categories(request: Request) -> dict[str, Any]:
    return success(get_category_service(request).list_categories(), "Categorías obtenidas")


@router.post("/pause-categories")
async def pause_category(request: Request, body: IdRequest) -> dict[str, Any]:
    get_category_service(request).pause_category(body.id)
    return success({"id": body.id}, "Categoría pausada exitosamente")


@router.post("/get-categories-with-exercises")
async def get_categories_with_exercises(request: Request, body: IdsRequest) -> dict[str, Any]:
    categories = get_category_service(request).get_categories_with_exercises(body.ids)
    return success(categories, "Categorías obtenidas")


@router.get("/get-by-ids/{group_id}")
async def get_recent_for_group(request: Request, group_id: str) -> dict[str, Any]:
    """First category of the group's process that ends soonest."""
    result = get_category_service(request).get_recent_for_group(group_id)
    return success(result, "Categorías obtenidas")


@router.put("/{category_id}")
async def update_category(
    request: Request, category_id: str, body: CategoryUpdateRequest
) -> dict[str, Any]:
    exercise_ids = (
        [activity.actividad_id for activity in body.activities] if body.activities else None
    )
    changes = body.model_dump(exclude={"activities"}, exclude_none=True)
    updated = get_category_service(request).update_category(category_id, changes, exercise_ids)
    return success(updated, "Categoría actualizada exitosamente")


@router.delete("/{category_id}")
async def delete_category(request: Request, category_id: str) -> dict[str, Any]:
    """Delete a category with its links, processes and schedules."""
    deleted = get_category_service(request).delete_category(category_id)
    return success({"id": category_id, "deleted": deleted}, "Categoría eliminada exitosamente")
