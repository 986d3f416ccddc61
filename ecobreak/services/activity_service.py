"""Activity catalogue service."""

import structlog
from googleapiclient.errors import HttpError

from ecobreak.adapters.drive_client import (
    DriveClient,
    extract_file_id,
    is_valid_drive_url,
    is_video_filename,
)
from ecobreak.models.activity import Activity
from ecobreak.models.base import utc_now_iso
from ecobreak.repositories.activity_repo import ActivityRepository
from ecobreak.services.exceptions import (
    BadRequestError,
    ExternalServiceError,
    NotFoundError,
)

logger = structlog.get_logger(__name__)


class VideoValidator:
    """Validates activity video URLs against Google Drive."""

    def __init__(self, drive_client: DriveClient | None, allowed_folders: list[str]) -> None:
        """VideoValidator initialization.

        Args:
            drive_client: Drive client, or None when Drive is not configured.
            allowed_folders: Folder IDs a Drive video must live in.
        """
        self.drive_client = drive_client
        self.allowed_folders = allowed_folders

    def validate(self, video_url: str) -> str:
        """Validate a video URL and resolve its file ID.

        Non-Drive URLs must name a video file. Drive URLs must point at an
        existing file inside one of the allowed folders.

        Args:
            video_url: URL or filename of the video.

        Returns:
            Drive file ID, or the filename for non-Drive URLs.

        Raises:
            BadRequestError: Malformed URL or wrong folder.
            NotFoundError: The Drive file does not exist.
            ExternalServiceError: Drive is unavailable.
        """
        if "drive.google.com" not in video_url:
            if not is_video_filename(video_url):
                raise BadRequestError("Invalid video filename")
            return video_url

        if not is_valid_drive_url(video_url):
            raise BadRequestError("Invalid Google Drive URL")

        file_id = extract_file_id(video_url)
        if not file_id:
            raise BadRequestError("Invalid video ID")

        if self.drive_client is None:
            raise ExternalServiceError("Google Drive is not configured")

        try:
            info = self.drive_client.get_file(file_id)
        except HttpError as e:
            if e.resp.status == 404:
                raise NotFoundError("Video not found in Google Drive") from e
            logger.error("drive_lookup_failed", file_id=file_id, error=str(e))
            raise ExternalServiceError("Error accessing Drive file") from e

        parents = info.get("parents", [])
        if not any(parent in self.allowed_folders for parent in parents):
            raise BadRequestError("Video must be in a valid EcoBreak folder")
        return file_id


class ActivityService:
    """Creates, lists and deletes break activities."""

    def __init__(self, activity_repo: ActivityRepository, video_validator: VideoValidator) -> None:
        """ActivityService initialization.

        Args:
            activity_repo: Activity repository
            video_validator: Video URL validator
        """
        self.activity_repo = activity_repo
        self.video_validator = video_validator

    def create_activity(self, activity: Activity) -> Activity:
        """Validate and store a new activity.

        Args:
            activity: Activity without id or timestamps.

        Returns:
            The stored activity with its generated id.

        Raises:
            BadRequestError: ``maxTime`` is not greater than ``minTime`` or the
                video is invalid.
        """
        if activity.max_time <= activity.min_time:
            raise BadRequestError("El tiempo máximo debe ser mayor que el tiempo mínimo")

        activity.drive_file_id = self.video_validator.validate(activity.video_url)

        now = utc_now_iso()
        activity.created_at = activity.created_at or now
        activity.updated_at = now
        self.activity_repo.create(activity)

        logger.info("activity_created", activity_id=activity.id, name=activity.name)
        return activity

    def list_activities(self) -> list[Activity]:
        """All activities."""
        return self.activity_repo.find_all()

    def delete_activity(self, activity_id: str) -> None:
        """Delete an activity.

        Raises:
            NotFoundError: The activity does not exist.
        """
        if not self.activity_repo.exists(activity_id):
            raise NotFoundError("Actividad no encontrada")
        self.activity_repo.delete(activity_id)
        logger.info("activity_deleted", activity_id=activity_id)
