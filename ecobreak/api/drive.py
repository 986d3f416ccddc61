"""Google Drive video API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ecobreak.adapters.drive_client import thumbnail_url
from ecobreak.api.auth import get_current_user
from ecobreak.api.dependencies import get_app_settings, get_drive_client
from ecobreak.api.responses import success
from ecobreak.services.drive_service import DriveService

router = APIRouter(
    prefix="/admin/drive",
    tags=["drive"],
    dependencies=[Depends(get_current_user)],
)


def get_drive_service(request: Request | None = None) -> DriveService:
    """Create a DriveService for the request."""
    settings = get_app_settings(request)
    return DriveService(get_drive_client(request), settings.DRIVE_VIDEO_FOLDER_IDS)


@router.get("/videos", response_model=None)
async def list_videos(request: Request) -> dict[str, Any] | JSONResponse:
    """Videos in the allowed folders with playback URLs."""
    videos = get_drive_service(request).list_videos()
    if not videos:
        return JSONResponse(
            content={
                "status": False,
                "message": "No se encontraron videos en las carpetas configuradas",
                "data": [],
            }
        )
    return success(videos, "Videos obtenidos exitosamente")


@router.get("/thumbnail/{file_id}")
async def thumbnail(file_id: str) -> RedirectResponse:
    return RedirectResponse(thumbnail_url(file_id), status_code=302)


@router.get("/validate/{file_id}")
async def validate_video(request: Request, file_id: str) -> dict[str, Any]:
    """Whether Drive finished processing a video."""
    processed = get_drive_service(request).is_processed(file_id)
    return success({"fileId": file_id, "isProcessed": processed}, "Estado del video obtenido")
