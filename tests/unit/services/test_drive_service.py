"""Tests for DriveService."""

from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from ecobreak.services.drive_service import DriveService
from ecobreak.services.exceptions import ExternalServiceError, NotFoundError


def http_error(status: int) -> HttpError:
    return HttpError(MagicMock(status=status, reason="error"), b"{}")


class TestDriveService:
    """Tests for DriveService."""

    @pytest.fixture
    def drive_client(self) -> MagicMock:
        client = MagicMock()
        client.access_token.return_value = "tok"
        client.list_folder_videos.side_effect = lambda folder_id: [
            {
                "id": f"{folder_id}_v1",
                "name": "cuello.mp4",
                "mimeType": "video/mp4",
                "videoMediaMetadata": {"durationMillis": "30000"},
            }
        ]
        return client

    def test_list_videos_from_every_folder(self, drive_client: MagicMock) -> None:
        service = DriveService(drive_client, ["f1", "f2"])

        videos = service.list_videos()

        assert [v["id"] for v in videos] == ["f1_v1", "f2_v1"]
        assert videos[0]["duration"] == "30000"
        assert videos[0]["streamUrl"].endswith("f1_v1?alt=media&access_token=tok")
        assert videos[0]["previewUrl"] == "https://drive.google.com/file/d/f1_v1/preview"
        assert videos[0]["status"] == "ready"

    def test_list_videos_empty_folders(self, drive_client: MagicMock) -> None:
        drive_client.list_folder_videos.side_effect = None
        drive_client.list_folder_videos.return_value = []

        assert DriveService(drive_client, ["f1"]).list_videos() == []

    def test_list_videos_drive_error(self, drive_client: MagicMock) -> None:
        drive_client.list_folder_videos.side_effect = http_error(500)

        with pytest.raises(ExternalServiceError):
            DriveService(drive_client, ["f1"]).list_videos()

    def test_not_configured(self) -> None:
        with pytest.raises(ExternalServiceError, match="no está configurado"):
            DriveService(None, ["f1"]).list_videos()

    def test_is_processed(self, drive_client: MagicMock) -> None:
        drive_client.is_video_processed.return_value = True
        assert DriveService(drive_client, []).is_processed("v1") is True

    def test_is_processed_missing_file(self, drive_client: MagicMock) -> None:
        drive_client.is_video_processed.side_effect = http_error(404)

        with pytest.raises(NotFoundError):
            DriveService(drive_client, []).is_processed("v1")

    def test_is_processed_other_error(self, drive_client: MagicMock) -> None:
        drive_client.is_video_processed.side_effect = http_error(403)

        with pytest.raises(ExternalServiceError):
            DriveService(drive_client, []).is_processed("v1")
