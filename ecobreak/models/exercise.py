"""Exercise model.

Exercises are the step-by-step movements users perform during a break.
"""

from pydantic import Field

from ecobreak.models.base import FirestoreModel


class Exercise(FirestoreModel):
    """An exercise.

    Firestore Collection: exercises
    """

    nombre: str = Field(..., description="Exercise name (unique)")
    duracion: str | int | None = Field(None, description="Duration as shown to users")
    descripcion: str | None = None
    pasos: list[str] = Field(default_factory=list, description="Steps")
    icono: str | None = None
    video_url: str | None = Field(None, description="Video URL (unique)")
    sensor_enabled: bool = False

    created_at: str | None = None
    updated_at: str | None = None
