"""Repository for Exercise entities."""

from ecobreak.models.exercise import Exercise
from ecobreak.repositories.base import BaseRepository


class ExerciseRepository(BaseRepository[Exercise]):
    """Exercise repository.

    Firestore Collection: exercises
    """

    collection_name = "exercises"
    model_class = Exercise

    def find_by_name(self, nombre: str) -> list[Exercise]:
        """Exercises with the exact name."""
        return self.find_by([("nombre", "==", nombre)])

    def find_by_video_url(self, video_url: str) -> list[Exercise]:
        """Exercises using the exact video URL."""
        return self.find_by([("videoUrl", "==", video_url)])
