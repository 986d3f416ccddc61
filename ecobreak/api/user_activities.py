"""The caller's assigned processes and today's activities."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.processes import get_process_service
from ecobreak.api.responses import success
from ecobreak.models.process_group import AssignmentStatus
from ecobreak.models.user import Identity

router = APIRouter(prefix="/user/activities", tags=["user-activities"])


class StatusUpdateRequest(BaseModel):
    status: AssignmentStatus
    progress: int | None = Field(None, ge=0, le=100)


@router.get("/today")
async def today_activities(
    request: Request, user: Identity = Depends(get_current_user)
) -> dict[str, Any]:
    """Activities of the caller's open processes that run today."""
    activities = get_process_service(request).today_activities(user.uid)
    return success(activities, "Actividades de hoy obtenidas")


@router.get("/assigned")
async def assigned_processes(
    request: Request, user: Identity = Depends(get_current_user)
) -> dict[str, Any]:
    processes = get_process_service(request).list_assigned(user.uid)
    return success(processes, "Procesos asignados obtenidos")


@router.get("/debug/assigned")
async def debug_assigned(
    request: Request, user: Identity = Depends(get_current_user)
) -> dict[str, Any]:
    return success(get_process_service(request).assignment_summary(user.uid), "Debug")


@router.put("/{process_id}/status")
async def update_status(
    request: Request,
    process_id: str,
    body: StatusUpdateRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """Update the status and progress of one of the caller's processes."""
    assignment = get_process_service(request).update_assignment_status(
        user.uid, process_id, body.status.value, body.progress
    )
    return success(assignment, "Estado actualizado exitosamente")
