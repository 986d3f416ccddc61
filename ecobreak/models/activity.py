"""Activity model for micro-break activities.

Activities are the admin-authored catalogue entries backed by a video.
"""

from enum import Enum

from pydantic import Field

from ecobreak.models.base import FirestoreModel


class ActivityType(str, Enum):
    """Activity type."""

    EXERCISE = "exercise"
    MEDITATION = "meditation"
    BREATHING = "breathing"


class ActivityCategory(str, Enum):
    """Activity category."""

    VISUAL = "Visual"
    AUDITIVA = "Auditiva"
    COGNITIVA = "Cognitiva"
    TREN_SUPERIOR = "Tren Superior"
    TREN_INFERIOR = "Tren Inferior"
    MOVILIDAD_ARTICULAR = "Movilidad Articular"
    ESTIRAMIENTOS_GENERALES = "Estiramientos Generales"


class Activity(FirestoreModel):
    """A break activity.

    Firestore Collection: activities
    """

    name: str
    description: str
    type: str = ActivityType.EXERCISE.value
    min_time: int = Field(15, description="Minimum time in seconds")
    max_time: int = Field(30, description="Maximum time in seconds")
    category: str = ActivityCategory.ESTIRAMIENTOS_GENERALES.value
    video_url: str
    drive_file_id: str | None = None
    sensor_enabled: bool = False
    duration: int = Field(300, description="Total duration in seconds")
    created_by: str | None = None

    created_at: str | None = None
    updated_at: str | None = None
