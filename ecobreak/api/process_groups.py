"""Process group API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.models.process_group import ProcessGroup
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import ProcessGroupRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.process_group_service import ProcessGroupService

router = APIRouter(
    prefix="/admin/process-groups",
    tags=["process-groups"],
    dependencies=[Depends(get_current_user)],
)

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class GroupCreateRequest(BaseModel):
    """Process group creation request."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    color: str = Field(..., pattern=COLOR_PATTERN)
    members: list[str] = Field(default_factory=list)


class GroupUpdateRequest(BaseModel):
    """Process group update request."""

    name: str | None = None
    description: str | None = None
    color: str | None = Field(None, pattern=COLOR_PATTERN)
    members: list[str] | None = None


class MembersRequest(BaseModel):
    user_ids: list[str] = Field(..., alias="userIds")


class PlanIdsRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


def get_process_group_service(request: Request | None = None) -> ProcessGroupService:
    """Create a ProcessGroupService for the request."""
    firestore = get_firestore(request)
    return ProcessGroupService(
        group_repo=ProcessGroupRepository(firestore),
        user_repo=UserRepository(firestore),
        plan_repo=PlanRepository(firestore),
    )


@router.get("")
async def list_groups(request: Request) -> dict[str, Any]:
    """All groups with their members and processes."""
    return success(get_process_group_service(request).list_groups(), "Grupos obtenidos")


@router.post("", status_code=201)
async def create_group(request: Request, body: GroupCreateRequest) -> dict[str, Any]:
    group = get_process_group_service(request).create_group(ProcessGroup(**body.model_dump()))
    return success(group, "Grupo creado exitosamente")


@router.get("/plans/all")
async def list_all_plans(request: Request) -> dict[str, Any]:
    return success(get_process_group_service(request).list_all_plans(), "Planes obtenidos")


@router.get("/{group_id}")
async def get_group(request: Request, group_id: str) -> dict[str, Any]:
    """A group with its processes active in the last 30 days."""
    group = get_process_group_service(request).get_group_with_recent_plans(group_id)
    return success(group, "Grupo obtenido")


@router.put("/{group_id}")
async def update_group(request: Request, group_id: str, body: GroupUpdateRequest) -> dict[str, Any]:
    changes = body.model_dump(exclude={"members"}, exclude_none=True)
    group = get_process_group_service(request).update_group(group_id, changes, body.members)
    return success(group, "Grupo actualizado exitosamente")


@router.delete("/{group_id}")
async def delete_group(request: Request, group_id: str) -> dict[str, Any]:
    get_process_group_service(request).delete_group(group_id)
    return success({"id": group_id}, "Grupo eliminado exitosamente")


@router.put("/{group_id}/members")
async def update_members(request: Request, group_id: str, body: MembersRequest) -> dict[str, Any]:
    """Replace the members of a group and tag each user with it.

    Returns:
        The group plus the user IDs that had no profile.
    """
    group = get_process_group_service(request).update_members(group_id, body.user_ids)
    return success(group, "Miembros actualizados exitosamente")


@router.delete("/{group_id}/plans")
async def delete_group_plans(request: Request, group_id: str, body: PlanIdsRequest) -> dict[str, Any]:
    deleted = get_process_group_service(request).delete_plans(body.ids)
    return success({"groupId": group_id, "deleted": deleted}, "Planes eliminados exitosamente")
