"""Repositories for user profiles and their push devices."""

from ecobreak.models.notification import Device
from ecobreak.models.user import UserProfile
from ecobreak.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserProfile]):
    """User profile repository.

    Firestore Collection: users
    """

    collection_name = "users"
    model_class = UserProfile

    def find_by_group(self, group_id: str) -> list[UserProfile]:
        """Users assigned to a process group."""
        return self.find_by([("groupId", "==", group_id)])

    def merge(self, user_id: str, fields: dict[str, object]) -> None:
        """Merge fields into a profile, creating it when missing.

        Args:
            user_id: User ID.
            fields: Stored field names and values.
        """
        self._db.set(self.collection, user_id, self._serialize_for_firestore(fields), merge=True)


class DeviceRepository(BaseRepository[Device]):
    """Push device repository.

    Firestore Collection: devices
    """

    collection_name = "devices"
    model_class = Device

    def tokens_for_users(self, user_ids: list[str]) -> list[str]:
        """Device tokens registered by any of the users.

        Args:
            user_ids: User IDs.

        Returns:
            Non-empty tokens, deduplicated.
        """
        tokens = (device.device_token for device in self.find_in("userId", user_ids))
        return list(dict.fromkeys(token for token in tokens if token))
