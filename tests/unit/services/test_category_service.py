"""Tests for CategoryService."""

import pytest

from ecobreak.models.base import utc_today
from ecobreak.models.category import Category
from ecobreak.repositories.category_repo import (
    CategoryExerciseRepository,
    CategoryHistoryRepository,
    CategoryRepository,
)
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.category_service import CategoryService
from ecobreak.services.exceptions import BadRequestError, NotFoundError
from tests.utils import InMemoryFirestore


def build_category_service(firestore: InMemoryFirestore) -> CategoryService:
    return CategoryService(
        category_repo=CategoryRepository(firestore),
        link_repo=CategoryExerciseRepository(firestore),
        exercise_repo=ExerciseRepository(firestore),
        plan_repo=PlanRepository(firestore),
        notification_plan_repo=NotificationPlanRepository(firestore),
        history_repo=CategoryHistoryRepository(firestore),
    )


class TestCategoryService:
    """Tests for CategoryService."""

    @pytest.fixture
    def firestore(self, fake_firestore: InMemoryFirestore) -> InMemoryFirestore:
        """Store with two exercises and one linked category."""
        fake_firestore.seed("exercises", "ex_1", {"nombre": "Cuello"})
        fake_firestore.seed("exercises", "ex_2", {"nombre": "Hombros"})
        fake_firestore.seed(
            "categories", "cat_1", {"nombre": "Tren superior", "createdAt": "2025-01-01T00:00:00.000Z"}
        )
        fake_firestore.seed(
            "categoriesXexercise", "l1", {"categoriaId": "cat_1", "actividadId": "ex_1", "order": 0}
        )
        return fake_firestore

    @pytest.fixture
    def service(self, firestore: InMemoryFirestore) -> CategoryService:
        return build_category_service(firestore)

    def test_create_category_links_exercises(
        self, service: CategoryService, firestore: InMemoryFirestore
    ) -> None:
        """Creating a category should store one ordered link per exercise."""
        created = service.create_category(Category(nombre="Piernas"), ["ex_2", "ex_1"])

        assert [e.id for e in created.ejercicios] == ["ex_2", "ex_1"]
        links = [
            link for link in firestore.docs("categoriesXexercise").values()
            if link["categoriaId"] == created.id
        ]
        assert sorted((link["order"], link["actividadId"]) for link in links) == [
            (0, "ex_2"),
            (1, "ex_1"),
        ]

    def test_create_category_empty_exercise_id(self, service: CategoryService) -> None:
        with pytest.raises(BadRequestError):
            service.create_category(Category(nombre="Vacía"), ["ex_1", ""])

    def test_list_categories_with_exercises(self, service: CategoryService) -> None:
        categories = service.list_categories()

        assert [c.id for c in categories] == ["cat_1"]
        assert [e.nombre for e in categories[0].ejercicios] == ["Cuello"]

    def test_update_replaces_links(
        self, service: CategoryService, firestore: InMemoryFirestore
    ) -> None:
        updated = service.update_category("cat_1", {"nombre": "Superior", "color": None}, ["ex_2"])

        assert updated.nombre == "Superior"
        assert [e.id for e in updated.ejercicios] == ["ex_2"]
        assert "l1" not in firestore.docs("categoriesXexercise")

    def test_update_without_exercises_keeps_links(self, service: CategoryService) -> None:
        updated = service.update_category("cat_1", {"descripcion": "Nueva"}, None)

        assert [e.id for e in updated.ejercicios] == ["ex_1"]

    def test_update_missing(self, service: CategoryService) -> None:
        with pytest.raises(NotFoundError):
            service.update_category("missing", {"nombre": "X"})

    def test_delete_cascades(self, service: CategoryService, firestore: InMemoryFirestore) -> None:
        """Deleting a category removes links, its processes and their schedules."""
        firestore.seed("plans", "proc_1", {"groupId": "g1", "categories": ["cat_1"]})
        firestore.seed("plans", "proc_2", {"groupId": "g1", "categories": ["cat_9"]})
        firestore.seed(
            "notificationPlans",
            "np_1",
            {
                "name": "Enero",
                "startDate": "2025-01-01T00:00:00.000",
                "endDate": "2025-01-31T00:00:00.000",
                "assignedPlans": {"2025-01-02T00:00:00.000": [{"id": "proc_1", "name": "P1"}]},
            },
        )
        firestore.seed(
            "notificationPlans",
            "np_2",
            {
                "name": "Febrero",
                "startDate": "2025-02-01T00:00:00.000",
                "endDate": "2025-02-28T00:00:00.000",
                "assignedPlans": {"2025-02-02T00:00:00.000": [{"id": "proc_2", "name": "P2"}]},
            },
        )

        result = service.delete_category("cat_1")

        assert result == {"links": 1, "plans": 1, "notification_plans": 1}
        assert "cat_1" not in firestore.docs("categories")
        assert list(firestore.docs("plans")) == ["proc_2"]
        assert list(firestore.docs("notificationPlans")) == ["np_2"]
        assert firestore.docs("categoriesXexercise") == {}

    def test_delete_missing(self, service: CategoryService) -> None:
        with pytest.raises(NotFoundError):
            service.delete_category("missing")

    def test_pause_category(self, service: CategoryService, firestore: InMemoryFirestore) -> None:
        service.pause_category("cat_1")
        assert firestore.docs("categories")["cat_1"]["status"] == "paused"

    def test_get_categories_with_exercises_skips_unknown(self, service: CategoryService) -> None:
        categories = service.get_categories_with_exercises(["missing", "cat_1"])
        assert [c.id for c in categories] == ["cat_1"]

    def test_get_recent_for_group(self, service: CategoryService, firestore: InMemoryFirestore) -> None:
        firestore.seed(
            "plans", "proc_1", {"groupId": "g1", "categories": ["cat_1"], "fechaFin": "2999-01-01"}
        )

        result = service.get_recent_for_group("g1")

        assert result["proceso"] == "proc_1"
        assert [c.id for c in result["categorias"]] == ["cat_1"]

    def test_get_recent_for_group_without_plan(self, service: CategoryService) -> None:
        with pytest.raises(BadRequestError):
            service.get_recent_for_group("g1")


class TestCategoryHistory:
    """Tests for per-user category history."""

    @pytest.fixture
    def service(self, fake_firestore: InMemoryFirestore) -> CategoryService:
        fake_firestore.seed("categories", "cat_1", {"nombre": "Cuello"})
        fake_firestore.seed("categories", "cat_2", {"nombre": "Piernas"})
        fake_firestore.seed(
            "plans", "proc_1", {"groupId": "g1", "estado": True, "categories": ["cat_1"]}
        )
        fake_firestore.seed(
            "plans", "proc_2", {"groupId": "g1", "estado": True, "categories": ["cat_2"]}
        )
        return build_category_service(fake_firestore)

    def test_save_history_once_per_day(self, service: CategoryService) -> None:
        assert service.save_history("u1", "proc_1", "g1") is True
        assert service.save_history("u1", "proc_1", "g1") is False

    def test_next_skips_processes_done_today(self, service: CategoryService) -> None:
        first = service.get_next_for_user("u1", "g1")
        service.save_history("u1", first["proceso"], "g1")

        second = service.get_next_for_user("u1", "g1")

        assert second["proceso"] is not None
        assert second["proceso"] != first["proceso"]

    def test_next_when_everything_done(
        self, service: CategoryService, fake_firestore: InMemoryFirestore
    ) -> None:
        for doc_id in ("proc_1", "proc_2"):
            fake_firestore.seed(
                "categoryHistory",
                f"h_{doc_id}",
                {"userId": "u1", "processId": doc_id, "groupId": "g1", "createAt": utc_today()},
            )

        assert service.get_next_for_user("u1", "g1") == {"categorias": [], "proceso": None}
