"""Exercise catalogue service."""

from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.exercise import Exercise
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)


class ExerciseService:
    """Manages exercises. Names and video URLs are unique."""

    def __init__(self, exercise_repo: ExerciseRepository) -> None:
        """ExerciseService initialization.

        Args:
            exercise_repo: Exercise repository
        """
        self.exercise_repo = exercise_repo

    def create_exercise(self, exercise: Exercise) -> Exercise:
        """Store a new exercise.

        Raises:
            BadRequestError: Another exercise has the same name or video URL.
        """
        if self.exercise_repo.find_by_name(exercise.nombre):
            raise BadRequestError("Ya existe un ejercicio con ese nombre")
        if exercise.video_url and self.exercise_repo.find_by_video_url(exercise.video_url):
            raise BadRequestError("Ya existe un ejercicio con ese videoUrl")

        now = utc_now_iso()
        exercise.created_at = exercise.created_at or now
        exercise.updated_at = now
        self.exercise_repo.create(exercise)

        logger.info("exercise_created", exercise_id=exercise.id, nombre=exercise.nombre)
        return exercise

    def list_exercises(self) -> list[Exercise]:
        """All exercises."""
        return self.exercise_repo.find_all()

    def update_exercise(self, exercise_id: str, changes: dict[str, Any]) -> Exercise:
        """Apply the changed, non-empty fields to an exercise.

        Args:
            exercise_id: Exercise ID.
            changes: Stored field names and proposed values. ``None`` and empty
                strings are ignored, as are values equal to the stored ones.

        Returns:
            The updated exercise.

        Raises:
            NotFoundError: The exercise does not exist.
        """
        current = self.exercise_repo.get_by_id(exercise_id)
        if current is None:
            raise NotFoundError("Ejercicio no encontrado")

        stored = current.model_dump(by_alias=True)
        updates = {
            key: value
            for key, value in changes.items()
            if key != "id" and value is not None and value != "" and stored.get(key) != value
        }
        self.exercise_repo.update_fields(exercise_id, updates)

        logger.info("exercise_updated", exercise_id=exercise_id, fields=sorted(updates))
        updated = self.exercise_repo.get_by_id(exercise_id)
        return updated or current

    def delete_exercise(self, exercise_id: str) -> None:
        """Delete an exercise.

        Raises:
            NotFoundError: The exercise does not exist.
        """
        if not self.exercise_repo.exists(exercise_id):
            raise NotFoundError("Ejercicio no encontrado")
        self.exercise_repo.delete(exercise_id)
        logger.info("exercise_deleted", exercise_id=exercise_id)

    def get_exercises_by_ids(self, exercise_ids: list[str]) -> list[Exercise]:
        """Fetch exercises in the requested order.

        Raises:
            NotFoundError: No IDs were given or one of them does not exist.
        """
        if not exercise_ids:
            raise NotFoundError("No se proporcionaron IDs de actividades")

        exercises = self.exercise_repo.get_many(exercise_ids)
        found = {exercise.id for exercise in exercises}
        for exercise_id in exercise_ids:
            if exercise_id not in found:
                raise NotFoundError(f"Ejercicio no encontrado: {exercise_id}")
        return exercises
