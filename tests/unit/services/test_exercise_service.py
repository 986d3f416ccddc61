"""Tests for ExerciseService."""

import pytest

from ecobreak.models.exercise import Exercise
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError
from ecobreak.services.exercise_service import ExerciseService
from tests.utils import InMemoryFirestore


class TestExerciseService:
    """Tests for ExerciseService."""

    @pytest.fixture
    def service(self, fake_firestore: InMemoryFirestore) -> ExerciseService:
        fake_firestore.seed(
            "exercises",
            "ex_1",
            {"nombre": "Sentadilla", "videoUrl": "sentadilla.mp4", "duracion": "30s"},
        )
        fake_firestore.seed("exercises", "ex_2", {"nombre": "Plancha"})
        return ExerciseService(ExerciseRepository(fake_firestore))

    def test_create_exercise(self, service: ExerciseService) -> None:
        created = service.create_exercise(Exercise(nombre="Estocada", video_url="estocada.mp4"))

        assert created.id is not None
        assert created.created_at is not None
        assert len(service.list_exercises()) == 3

    def test_duplicate_name_rejected(self, service: ExerciseService) -> None:
        with pytest.raises(BadRequestError, match="nombre"):
            service.create_exercise(Exercise(nombre="Sentadilla"))

    def test_duplicate_video_rejected(self, service: ExerciseService) -> None:
        with pytest.raises(BadRequestError, match="videoUrl"):
            service.create_exercise(Exercise(nombre="Otra", video_url="sentadilla.mp4"))

    def test_update_ignores_empty_and_unchanged(
        self, service: ExerciseService, fake_firestore: InMemoryFirestore
    ) -> None:
        """Empty strings, None and unchanged values should not be written."""
        updated = service.update_exercise(
            "ex_1",
            {"nombre": "Sentadilla", "descripcion": "", "duracion": "45s", "icono": None},
        )

        assert updated.duracion == "45s"
        stored = fake_firestore.docs("exercises")["ex_1"]
        assert "descripcion" not in stored
        assert "icono" not in stored
        assert "updatedAt" in stored

    def test_update_missing(self, service: ExerciseService) -> None:
        with pytest.raises(NotFoundError):
            service.update_exercise("missing", {"nombre": "X"})

    def test_delete_missing(self, service: ExerciseService) -> None:
        with pytest.raises(NotFoundError):
            service.delete_exercise("missing")

    def test_get_by_ids_keeps_order(self, service: ExerciseService) -> None:
        exercises = service.get_exercises_by_ids(["ex_2", "ex_1"])
        assert [e.id for e in exercises] == ["ex_2", "ex_1"]

    def test_get_by_ids_missing(self, service: ExerciseService) -> None:
        with pytest.raises(NotFoundError, match="ex_9"):
            service.get_exercises_by_ids(["ex_1", "ex_9"])

    def test_get_by_ids_empty(self, service: ExerciseService) -> None:
        with pytest.raises(NotFoundError):
            service.get_exercises_by_ids([])
