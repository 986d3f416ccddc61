"""Repositories for notification plans and user pause settings."""

from ecobreak.models.notification import NotificationPause, NotificationPlan
from ecobreak.repositories.base import BaseRepository


class NotificationPlanRepository(BaseRepository[NotificationPlan]):
    """Notification plan repository.

    Firestore Collection: notificationPlans
    """

    collection_name = "notificationPlans"
    model_class = NotificationPlan

    def find_all_newest_first(self) -> list[NotificationPlan]:
        """All notification plans, newest first."""
        return self.find_all(order_by="createdAt", descending=True)

    def find_running(self, day: str) -> list[NotificationPlan]:
        """Active plans whose date range covers a day.

        Firestore allows range filters on one field only, so the end date is
        checked in memory.

        Args:
            day: Day key (``YYYY-MM-DDT00:00:00.000``).

        Returns:
            Running plans.
        """
        plans = self.find_by([("isActive", "==", True), ("startDate", "<=", day)])
        return [plan for plan in plans if plan.end_date >= day]

    def find_expired(self, day: str) -> list[NotificationPlan]:
        """Active plans whose end date is before a day."""
        return self.find_by([("isActive", "==", True), ("endDate", "<", day)])

    def find_ended_before(self, moment: str) -> list[NotificationPlan]:
        """Plans (active or not) that ended before a moment."""
        return self.find_by([("endDate", "<", moment)])

    def find_created_until(self, moment: str) -> list[NotificationPlan]:
        """Plans created up to a moment."""
        return self.find_by([("createdAt", "<=", moment)])


class NotificationPauseRepository(BaseRepository[NotificationPause]):
    """Notification pause repository.

    Firestore Collection: notificationPauses
    """

    collection_name = "notificationPauses"
    model_class = NotificationPause

    def find_by_user(self, user_id: str) -> list[NotificationPause]:
        """Pause settings of a user."""
        return self.find_by([("idUser", "==", user_id)])

    def find_by_users(self, user_ids: list[str]) -> list[NotificationPause]:
        """Pause settings of several users."""
        return self.find_in("idUser", user_ids)

    def find_enabled(self) -> list[NotificationPause]:
        """Pause settings with notifications enabled."""
        return self.find_by([("notifiActive", "==", True)])
