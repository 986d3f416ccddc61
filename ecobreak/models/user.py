"""User profile and identity models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ecobreak.models.base import FirestoreModel

DEFAULT_AVATAR_COLOR = "0xFF0067AC"


class Role(str, Enum):
    """Caller role resolved from the ID token."""

    ADMIN = "admin"
    USER = "user"


class Identity(BaseModel):
    """The authenticated caller."""

    uid: str
    email: str | None = None
    role: Role = Role.USER
    disabled: bool = False
    email_verified: bool = False

    @property
    def is_admin(self) -> bool:
        """Whether the caller is the admin account."""
        return self.role == Role.ADMIN


class UserProfile(FirestoreModel):
    """Profile of an app user. The document ID is the Firebase Auth UID.

    Firestore Collection: users
    """

    name: str | None = None
    last_name: str | None = None
    email: str | None = None
    gender: str | None = None
    group_id: str | None = None
    avatar_color: str | int | None = None
    phone_number: str | None = None
    num_activities: int = 0
    num_time_in_app: int = 0
    notification_settings: dict[str, Any] = Field(default_factory=dict)

    created_at: str | None = None
    updated_at: str | None = None

    @property
    def full_name(self) -> str:
        """``name lastName`` with missing parts dropped."""
        return " ".join(part for part in (self.name, self.last_name) if part)
