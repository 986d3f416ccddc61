"""Activity plan API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.plan import PlanActivity
from ecobreak.repositories.activity_repo import ActivityRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.plan_service import PlanService

router = APIRouter(
    prefix="/admin/plans",
    tags=["plans"],
    dependencies=[Depends(get_current_user)],
)


class PlanCreateRequest(BaseModel):
    """Plan creation request."""

    name: str = Field(..., min_length=1)
    description: str = ""
    activities: list[PlanActivity]


class PlanUpdateRequest(BaseModel):
    """Plan update request."""

    name: str | None = None
    description: str | None = None
    status: str | None = None
    activities: list[PlanActivity] | None = None


class PlanIdRequest(BaseModel):
    id: str


def get_plan_service(request: Request | None = None) -> PlanService:
    """Create a PlanService for the request."""
    firestore = get_firestore(request)
    return PlanService(PlanRepository(firestore), ActivityRepository(firestore))


@router.post("", status_code=201)
async def create_plan(request: Request, body: PlanCreateRequest) -> dict[str, Any]:
    """Create a plan from existing activities."""
    plan = get_plan_service(request).create_plan(body.name, body.description, body.activities)
    return success(plan, "Plan creado exitosamente")


@router.get("")
async def list_plans(request: Request) -> dict[str, Any]:
    return success(get_plan_service(request).list_plans(), "Planes obtenidos")


@router.post("/pause-plans")
async def pause_plan(request: Request, body: PlanIdRequest) -> dict[str, Any]:
    get_plan_service(request).pause_plan(body.id)
    return success({"id": body.id}, "Plan pausado exitosamente")


@router.put("/{plan_id}")
async def update_plan(request: Request, plan_id: str, body: PlanUpdateRequest) -> dict[str, Any]:
    changes = body.model_dump(exclude={"activities"}, exclude_none=True)
    plan = get_plan_service(request).update_plan(plan_id, changes, body.activities)
    return success(plan, "Plan actualizado exitosamente")


@router.delete("/{plan_id}")
async def delete_plan(request: Request, plan_id: str) -> dict[str, Any]:
    get_plan_service(request).delete_plan(plan_id)
    return success({"id": plan_id}, "Plan eliminado exitosamente")
