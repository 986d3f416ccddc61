"""Repository for Activity entities."""

from ecobreak.models.activity import Activity
from ecobreak.repositories.base import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """Activity repository.

    Firestore Collection: activities
    """

    collection_name = "activities"
    model_class = Activity

    def missing_ids(self, activity_ids: list[str]) -> list[str]:
        """Return the IDs that do not exist, in request order.

        Args:
            activity_ids: Activity IDs to check.

        Returns:
            IDs with no stored activity.
        """
        found = {activity.id for activity in self.get_many(activity_ids)}
        return [activity_id for activity_id in activity_ids if activity_id not in found]
