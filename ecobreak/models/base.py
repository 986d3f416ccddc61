"""Shared base for Firestore-backed models.

Stored documents keep their camelCase field names; Python code uses
snake_case attributes mapped through aliases.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Timestamps are stored as strings and compared lexicographically, so the
    format must stay fixed-width.
    """
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today() -> str:
    """Current UTC date as ``YYYY-MM-DD``."""
    return datetime.now(UTC).date().isoformat()


class FirestoreModel(BaseModel):
    """Base model for Firestore documents.

    ``id`` is the Firestore document ID and is never written into the
    document body.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str | None = None

    def to_response(self) -> dict[str, object]:
        """Serialize for API responses using stored field names."""
        return self.model_dump(mode="json", by_alias=True)
