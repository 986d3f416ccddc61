"""Notification scheduling models."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ecobreak.models.base import FirestoreModel

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}(T[\d:.]+Z?)?$"


def to_day_key(value: str) -> str:
    """Normalize an ISO date or datetime to ``YYYY-MM-DDT00:00:00.000``.

    Raises:
        ValueError: The value does not start with a valid date.
    """
    return f"{date.fromisoformat(value[:10]).isoformat()}T00:00:00.000"


class ScheduledPlan(BaseModel):
    """A plan slot inside a notification plan day.

    ``time`` and ``timeSecond`` are the morning and afternoon ``HH:MM`` slots.
    ``group`` is the process group that receives the reminder.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    time: str | None = None
    time_second: str | None = None
    color: str | None = None
    group: str | None = None


class NotificationPlan(FirestoreModel):
    """A reminder schedule over a date range.

    Firestore Collection: notificationPlans

    ``assigned_plans`` is keyed by day (``YYYY-MM-DDT00:00:00.000``).
    """

    name: str
    start_date: str
    end_date: str
    time: str | None = None
    time_second: str | None = None
    assigned_plans: dict[str, list[ScheduledPlan]] = Field(default_factory=dict)
    is_active: bool = True

    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_day_key(cls, value: str) -> str:
        # range checks compare these against day keys as strings
        return to_day_key(value)

    def plan_ids(self) -> list[str]:
        """IDs of every plan referenced by this schedule, deduplicated."""
        ids: dict[str, None] = {}
        for plans in self.assigned_plans.values():
            for plan in plans:
                ids[plan.id] = None
        return list(ids)


class NotificationPause(FirestoreModel):
    """A user's reminder window and frequency.

    Firestore Collection: notificationPauses
    """

    id_user: str
    date_start: str = Field(..., description="Window start HH:MM")
    date_end: str = Field(..., description="Window end HH:MM")
    notifi_active: bool = True
    notifi_pause_active: bool = False
    frecuencia: int = Field(0, ge=0, description="Hours between activity reminders")

    created_at: str | None = None
    updated_at: str | None = None


class Device(FirestoreModel):
    """A registered push device.

    Firestore Collection: devices
    """

    user_id: str
    device_token: str
