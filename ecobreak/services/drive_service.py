"""Drive video catalogue for the admin panel."""

from typing import Any

import structlog
from googleapiclient.errors import HttpError

from ecobreak.adapters.drive_client import DriveClient, media_url, preview_url, thumbnail_url
from ecobreak.services.exceptions import ExternalServiceError, NotFoundError

logger = structlog.get_logger(__name__)


class DriveService:
    """Lists exercise videos stored in the allowed Drive folders."""

    def __init__(self, drive_client: DriveClient | None, folder_ids: list[str]) -> None:
        """DriveService initialization.

        Args:
            drive_client: Drive client, None when no service account is
                configured.
            folder_ids: Folders that hold exercise videos.
        """
        self.drive_client = drive_client
        self.folder_ids = folder_ids

    def list_videos(self) -> list[dict[str, Any]]:
        """Every video in the allowed folders with playback URLs.

        Raises:
            ExternalServiceError: Drive is not configured or a listing failed.
        """
        client = self._client()
        try:
            token = client.access_token()
            files = [
                file for folder_id in self.folder_ids for file in client.list_folder_videos(folder_id)
            ]
        except HttpError as e:
            logger.error("drive_listing_failed", error=str(e))
            raise ExternalServiceError("Error al obtener videos de Google Drive") from e

        videos = [self._video(file, token) for file in files]
        logger.info("drive_videos_listed", folders=len(self.folder_ids), count=len(videos))
        return videos

    def is_processed(self, file_id: str) -> bool:
        """Whether Drive finished processing a video.

        Raises:
            NotFoundError: The file does not exist or is not shared.
            ExternalServiceError: Drive is not configured or the call failed.
        """
        client = self._client()
        try:
            return client.is_video_processed(file_id)
        except HttpError as e:
            if e.resp.status == 404:
                raise NotFoundError("Archivo no encontrado en Google Drive") from e
            raise ExternalServiceError("Error al consultar Google Drive") from e

    def _client(self) -> DriveClient:
        if self.drive_client is None:
            raise ExternalServiceError("Google Drive no está configurado")
        return self.drive_client

    @staticmethod
    def _video(file: dict[str, Any], token: str) -> dict[str, Any]:
        file_id = file["id"]
        metadata = file.get("videoMediaMetadata") or {}
        stream = media_url(file_id, token)
        return {
            "id": file_id,
            "name": file.get("name"),
            "mimeType": file.get("mimeType"),
            "thumbnailUrl": thumbnail_url(file_id),
            "previewUrl": preview_url(file_id),
            "streamUrl": stream,
            "downloadUrl": stream,
            "embedUrl": preview_url(file_id),
            "webContentLink": file.get("webContentLink"),
            "size": file.get("size"),
            "duration": metadata.get("durationMillis"),
            "status": "ready",
        }
