"""User notification pause settings."""

from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.notification import NotificationPause
from ecobreak.repositories.notification_repo import NotificationPauseRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)

PAUSE_FIELDS = {
    "dateStart": "date_start",
    "dateEnd": "date_end",
    "notifiActive": "notifi_active",
    "notifiPauseActive": "notifi_pause_active",
    "frecuencia": "frecuencia",
}


class NotificationPauseService:
    """Stores the reminder window and frequency of each user."""

    def __init__(self, pause_repo: NotificationPauseRepository) -> None:
        self.pause_repo = pause_repo

    def create(self, pause: NotificationPause) -> NotificationPause:
        """Store pause settings for a user.

        Raises:
            BadRequestError: The window starts after it ends.
        """
        _check_window(pause.date_start, pause.date_end)

        now = utc_now_iso()
        pause.created_at = now
        pause.updated_at = now
        self.pause_repo.create(pause)
        logger.info("notification_pause_created", user_id=pause.id_user, pause_id=pause.id)
        return pause

    def update_for_user(self, user_id: str, changes: dict[str, Any]) -> NotificationPause:
        """Update a user's first pause settings document.

        Args:
            user_id: User ID.
            changes: Stored field names and values; ``None`` keeps the
                current value.

        Raises:
            NotFoundError: The user has no pause settings.
            BadRequestError: The resulting window starts after it ends.
        """
        pauses = self.pause_repo.find_by_user(user_id)
        if not pauses:
            raise NotFoundError("Configuración de pausas no encontrada")
        pause = pauses[0]

        updates = {
            key: value
            for key, value in changes.items()
            if key in PAUSE_FIELDS and value is not None
        }
        merged = pause.model_copy(update={PAUSE_FIELDS[key]: value for key, value in updates.items()})
        _check_window(merged.date_start, merged.date_end)

        self.pause_repo.update_fields(pause.id or "", updates)
        logger.info("notification_pause_updated", user_id=user_id, fields=sorted(updates))
        merged.updated_at = utc_now_iso()
        return merged

    def list_for_user(self, user_id: str) -> list[NotificationPause]:
        return self.pause_repo.find_by_user(user_id)


def _check_window(start: str, end: str) -> None:
    if start > end:
        raise BadRequestError("La hora de inicio debe ser anterior a la hora de fin")
