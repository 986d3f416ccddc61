"""Process upload API endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.categories import get_category_service
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.repositories.category_repo import CategoryRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import (
    AssignedProcessRepository,
    ProcessGroupRepository,
)
from ecobreak.services.process_service import ProcessService

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/admin/process-upload",
    tags=["process-upload"],
    dependencies=[Depends(get_current_user)],
)


class ProcessUploadRequest(BaseModel):
    """Process upload request."""

    group_id: str = Field(..., alias="groupId", min_length=1)
    nombre: str = Field(..., min_length=1)
    categories: list[str] = Field(default_factory=list)
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")


class AssignRequest(BaseModel):
    user_id: str = Field(..., alias="userId", min_length=1)


def get_process_service(request: Request | None = None) -> ProcessService:
    """Create a ProcessService for the request."""
    firestore = get_firestore(request)
    return ProcessService(
        plan_repo=PlanRepository(firestore),
        category_repo=CategoryRepository(firestore),
        group_repo=ProcessGroupRepository(firestore),
        assignments_for=lambda user_id: AssignedProcessRepository(firestore, user_id),
        category_service=get_category_service(request),
    )


@router.post("/upload", status_code=201)
async def upload_process(request: Request, body: ProcessUploadRequest) -> dict[str, Any]:
    """Create a process for a group and sync it to every member.

    Returns:
        The created process.
    """
    process = get_process_service(request).upload_process(
        group_id=body.group_id,
        nombre=body.nombre,
        categories=body.categories,
        start_date=body.start_date,
        end_date=body.end_date,
    )
    return success(process, "Proceso cargado exitosamente")


@router.get("/active")
async def list_active_processes(request: Request) -> dict[str, Any]:
    processes = get_process_service(request).list_active_processes()
    return success(processes, "Procesos activos obtenidos")


@router.post("/{process_id}/deactivate")
async def deactivate_process(request: Request, process_id: str) -> dict[str, Any]:
    """Stop a process and mark its assignments inactive."""
    updated = get_process_service(request).deactivate_process(process_id)
    return success(
        {"id": process_id, "assignmentsUpdated": updated}, "Proceso desactivado exitosamente"
    )


@router.post("/{process_id}/assign")
async def assign_process(request: Request, process_id: str, body: AssignRequest) -> dict[str, Any]:
    """Assign a process to a single user as active."""
    assignment = get_process_service(request).assign_process(process_id, body.user_id)
    return success(assignment, "Proceso asignado exitosamente")
