"""Admin pause history API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field

from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_firestore
from ecobreak.api.responses import success
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.pause_history_service import PauseHistoryService

router = APIRouter(
    prefix="/admin/pause-history",
    tags=["pause-history"],
    dependencies=[Depends(get_current_user)],
)


class ExportRequest(BaseModel):
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")


def get_pause_history_service(request: Request | None = None) -> PauseHistoryService:
    """Create a PauseHistoryService for the request."""
    firestore = get_firestore(request)
    return PauseHistoryService(ExerciseHistoryRepository(firestore), UserRepository(firestore))


@router.get("")
async def get_history(
    request: Request,
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
) -> dict[str, Any]:
    rows = get_pause_history_service(request).get_history(start_date, end_date)
    return success(rows, "Historial de pausas obtenido")


@router.post("/export")
async def export_history(request: Request, body: ExportRequest) -> Response:
    """Pause history as a CSV download."""
    content = get_pause_history_service(request).export_csv(body.start_date, body.end_date)
    filename = f"pause-history-{body.start_date[:10]}-{body.end_date[:10]}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
