"""Exercise completion history model."""

from pydantic import Field

from ecobreak.models.base import FirestoreModel


class ExerciseHistory(FirestoreModel):
    """One completed exercise.

    Firestore Collection: exercisesHistory
    """

    id_usuario: str
    id_grupo: str | None = None
    id_plan: str | None = None
    id_ejercicio: str | None = None
    id_categoria: str | None = None
    nombre: str | None = None
    categoria: str | None = None
    tiempo: float = Field(0, ge=0, description="Time spent in minutes")
    repeticiones: int = Field(0, ge=0)
    sensor_enabled: bool = False
    estado: str | None = None

    created_at: str | None = None
