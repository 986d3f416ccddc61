"""Per-user category history API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.categories import get_category_service
from ecobreak.api.responses import success
from ecobreak.models.user import Identity

router = APIRouter(prefix="/user/category-history", tags=["category-history"])


class CategoryHistoryRequest(BaseModel):
    process_id: str = Field(..., alias="processId", min_length=1)
    group_id: str | None = Field(None, alias="groupId")


@router.post("", status_code=201)
async def save_history(
    request: Request,
    body: CategoryHistoryRequest,
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """Record that the caller completed a process today."""
    created = get_category_service(request).save_history(user.uid, body.process_id, body.group_id)
    message = "Historial guardado" if created else "El historial de hoy ya existe"
    return success({"created": created}, message)


@router.get("/next")
async def next_categories(
    request: Request,
    group_id: str | None = Query(None, alias="groupId"),
    user: Identity = Depends(get_current_user),
) -> dict[str, Any]:
    """The next active process the caller has not done today."""
    result = get_category_service(request).get_next_for_user(user.uid, group_id)
    return success(result, "Categorías obtenidas")
