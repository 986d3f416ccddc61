"""Google Drive v3 client for exercise videos."""

import re
from typing import Any

import structlog
from google.auth.transport.requests import Request as AuthRequest
from google.oauth2 import service_account
from googleapiclient.discovery import build

logger = structlog.get_logger(__name__)

DRIVE_SCOPES = [
    "https://www.googleapis.com/auth/drive.readonly",
    "https://www.googleapis.com/auth/drive.metadata.readonly",
]

VIDEO_EXTENSION_PATTERN = re.compile(r"\.(mp4|webm|mov|avi)$", re.IGNORECASE)

VIDEO_LIST_FIELDS = (
    "files(id, name, mimeType, size, videoMediaMetadata, capabilities, webContentLink)"
)


def is_video_filename(url: str) -> bool:
    """Whether the URL or filename ends in a supported video extension."""
    return VIDEO_EXTENSION_PATTERN.search(url) is not None


def is_valid_drive_url(url: str) -> bool:
    """Check that a URL is a Drive file link or a plain video filename.

    Args:
        url: Video URL.

    Returns:
        True if the URL can be resolved to a Drive file ID or filename.
    """
    if "drive.google.com" in url:
        return "/file/d/" in url or "?id=" in url
    return is_video_filename(url)


def extract_file_id(url: str) -> str | None:
    """Extract the Drive file ID from a sharing URL.

    ``https://drive.google.com/file/d/{id}/view`` and ``...?id={id}`` yield the
    ID; a direct video filename is returned unchanged.

    Args:
        url: Video URL.

    Returns:
        File ID, filename, or None.
    """
    if "drive.google.com" in url:
        if "/file/d/" in url:
            return url.split("/file/d/")[1].split("/")[0] or None
        if "id=" in url:
            return url.split("id=")[1].split("&")[0] or None
    if is_video_filename(url):
        return url
    return None


def thumbnail_url(file_id: str) -> str:
    """Public thumbnail URL for a Drive file."""
    return f"https://drive.google.com/thumbnail?id={file_id}&sz=w400-h300-n"


def preview_url(file_id: str) -> str:
    """Embeddable preview URL for a Drive file."""
    return f"https://drive.google.com/file/d/{file_id}/preview"


def media_url(file_id: str, access_token: str) -> str:
    """Direct media URL authorized with an access token."""
    return (
        f"https://www.googleapis.com/drive/v3/files/{file_id}"
        f"?alt=media&access_token={access_token}"
    )


class DriveClient:
    """Read-only Drive client authenticated with a service account."""

    def __init__(self, service_account_info: dict[str, Any]) -> None:
        """Initialize Drive client.

        Args:
            service_account_info: Parsed service account JSON.
        """
        self._credentials = service_account.Credentials.from_service_account_info(
            service_account_info, scopes=DRIVE_SCOPES
        )
        self._service = build(
            "drive", "v3", credentials=self._credentials, cache_discovery=False
        )

    def get_file(self, file_id: str, fields: str = "id, name, mimeType, parents") -> dict[str, Any]:
        """Get file metadata.

        Args:
            file_id: Drive file ID.
            fields: Partial response fields.

        Returns:
            File metadata.

        Raises:
            googleapiclient.errors.HttpError: When the file is missing or
                not shared with the service account.
        """
        result: dict[str, Any] = (
            self._service.files()
            .get(fileId=file_id, fields=fields, supportsAllDrives=True)
            .execute()
        )
        return result

    def list_folder_videos(self, folder_id: str) -> list[dict[str, Any]]:
        """List non-trashed videos directly inside a folder.

        Args:
            folder_id: Drive folder ID.

        Returns:
            Raw file metadata ordered by name.
        """
        files: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            response = (
                self._service.files()
                .list(
                    q=(
                        f"'{folder_id}' in parents and "
                        "(mimeType contains 'video/') and trashed=false"
                    ),
                    fields=f"nextPageToken, {VIDEO_LIST_FIELDS}",
                    orderBy="name",
                    supportsAllDrives=True,
                    includeItemsFromAllDrives=True,
                    pageToken=page_token,
                )
                .execute()
            )
            files.extend(response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return files

    def is_video_processed(self, file_id: str) -> bool:
        """Whether Drive finished processing a video.

        A video is ready once it is downloadable and exposes media metadata.

        Args:
            file_id: Drive file ID.

        Returns:
            True when the video is ready to stream.
        """
        data = self.get_file(
            file_id, fields="id, name, mimeType, videoMediaMetadata, capabilities"
        )
        can_download = bool(data.get("capabilities", {}).get("canDownload", False))
        return can_download and bool(data.get("videoMediaMetadata"))

    def access_token(self) -> str:
        """Return a valid OAuth access token, refreshing when needed."""
        if not self._credentials.valid:
            self._credentials.refresh(AuthRequest())
        return str(self._credentials.token)
