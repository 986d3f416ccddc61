"""Tests for UserService."""

from unittest.mock import MagicMock

import pytest
from firebase_admin import auth

from ecobreak.adapters.firebase_auth import AuthUser
from ecobreak.repositories.category_repo import CategoryExerciseRepository
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError
from ecobreak.services.user_service import UserService
from tests.utils import InMemoryFirestore


def build_user_service(firestore: InMemoryFirestore, auth_client: MagicMock) -> UserService:
    return UserService(
        user_repo=UserRepository(firestore),
        auth_client=auth_client,
        notification_plan_repo=NotificationPlanRepository(firestore),
        plan_repo=PlanRepository(firestore),
        link_repo=CategoryExerciseRepository(firestore),
        history_repo=ExerciseHistoryRepository(firestore),
    )


class TestUserProfile:
    """Tests for profile operations."""

    @pytest.fixture
    def service(
        self, fake_firestore: InMemoryFirestore, mock_auth_client: MagicMock
    ) -> UserService:
        fake_firestore.seed(
            "users",
            "user_001",
            {"name": "Ana", "lastName": "Díaz", "email": "ana@ecobreak.test", "groupId": "g1"},
        )
        return build_user_service(fake_firestore, mock_auth_client)

    def test_get_profile_defaults_avatar(self, service: UserService) -> None:
        profile = service.get_profile("user_001")

        assert profile["uid"] == "user_001"
        assert profile["lastName"] == "Díaz"
        assert profile["avatarColor"] == "0xFF0067AC"

    def test_get_profile_missing(self, service: UserService) -> None:
        with pytest.raises(NotFoundError):
            service.get_profile("nobody")

    def test_update_profile_maps_phone(
        self, service: UserService, fake_firestore: InMemoryFirestore, mock_auth_client: MagicMock
    ) -> None:
        """``telefono`` is stored as ``phoneNumber``; None values are ignored."""
        service.update_profile("user_001", {"telefono": "3001234567", "gender": None})

        stored = fake_firestore.docs("users")["user_001"]
        assert stored["phoneNumber"] == "3001234567"
        assert "gender" not in stored
        mock_auth_client.update_user.assert_not_called()

    def test_update_profile_pushes_new_email(
        self, service: UserService, mock_auth_client: MagicMock
    ) -> None:
        profile = service.update_profile("user_001", {"email": "ana.diaz@ecobreak.test"})

        mock_auth_client.update_user.assert_called_once_with(
            "user_001", email="ana.diaz@ecobreak.test"
        )
        assert profile["email"] == "ana.diaz@ecobreak.test"

    def test_update_stats_creates_missing_profile(
        self, service: UserService, fake_firestore: InMemoryFirestore
    ) -> None:
        service.update_stats("user_002", 4, None)

        stored = fake_firestore.docs("users")["user_002"]
        assert stored["numActivities"] == 4
        assert "numTimeInApp" not in stored

    def test_update_notification_settings(
        self, service: UserService, fake_firestore: InMemoryFirestore
    ) -> None:
        service.update_notification_settings("user_001", {"sound": False})

        assert fake_firestore.docs("users")["user_001"]["notificationSettings"] == {"sound": False}

    def test_get_all_stats(self, service: UserService) -> None:
        stats = service.get_all_stats()

        assert stats == [
            {
                "id": "user_001",
                "name": "Ana Díaz",
                "email": "ana@ecobreak.test",
                "numActivities": 0,
                "numTimeInApp": 0,
            }
        ]


class TestUserStats:
    """Tests for per-day completion statistics."""

    @pytest.fixture
    def service(
        self, fake_firestore: InMemoryFirestore, mock_auth_client: MagicMock
    ) -> UserService:
        fake_firestore.seed("users", "user_001", {"name": "Ana", "groupId": "g1"})
        fake_firestore.seed("plans", "proc_1", {"groupId": "g1", "categories": ["cat_1", "cat_2"]})
        fake_firestore.seed(
            "categoriesXexercise", "l1", {"categoriaId": "cat_1", "actividadId": "ex_1"}
        )
        fake_firestore.seed(
            "categoriesXexercise", "l2", {"categoriaId": "cat_2", "actividadId": "ex_2"}
        )
        fake_firestore.seed(
            "categoriesXexercise", "l3", {"categoriaId": "cat_2", "actividadId": "ex_1"}
        )
        fake_firestore.seed(
            "notificationPlans",
            "np_1",
            {
                "name": "Enero",
                "startDate": "2025-01-01T00:00:00.000",
                "endDate": "2025-01-31T00:00:00.000",
                "createdAt": "2025-01-01T08:00:00.000Z",
                "assignedPlans": {
                    "2025-01-02T00:00:00.000": [{"id": "proc_1", "name": "P1", "group": "g1"}],
                    "2025-01-03T00:00:00.000": [
                        {"id": "proc_1", "name": "P1", "group": "g1"},
                        {"id": "proc_9", "name": "Otro", "group": "g2"},
                    ],
                },
            },
        )
        fake_firestore.seed(
            "exercisesHistory",
            "h1",
            {"idUsuario": "user_001", "tiempo": 2.5, "repeticiones": 10,
             "createdAt": "2025-01-02T09:00:00.000Z"},
        )
        fake_firestore.seed(
            "exercisesHistory",
            "h2",
            {"idUsuario": "user_001", "tiempo": 1.5, "repeticiones": 5,
             "createdAt": "2025-01-05T09:00:00.000Z"},
        )
        return build_user_service(fake_firestore, mock_auth_client)

    def test_get_stats(self, service: UserService) -> None:
        """Two slots x two categories x two distinct exercises."""
        stats = service.get_stats("user_001", "2025-01-03")

        assert stats == {
            "activities_done": 1,
            "total_activities": 8,
            "total_repeticiones": 10,
            "total_time": 2.5,
        }

    def test_get_stats_without_group(
        self, service: UserService, fake_firestore: InMemoryFirestore
    ) -> None:
        fake_firestore.seed("users", "user_002", {"name": "Luis"})

        stats = service.get_stats("user_002", "2025-01-31")

        assert stats["total_activities"] == 0
        assert stats["activities_done"] == 0

    def test_get_stats_unknown_user(self, service: UserService) -> None:
        with pytest.raises(NotFoundError):
            service.get_stats("nobody", "2025-01-03")


class TestRegistration:
    """Tests for registration and password reset."""

    @pytest.fixture
    def service(
        self, fake_firestore: InMemoryFirestore, mock_auth_client: MagicMock
    ) -> UserService:
        mock_auth_client.create_user.return_value = AuthUser(
            uid="new_uid", email="luis@ecobreak.test"
        )
        return build_user_service(fake_firestore, mock_auth_client)

    def test_register_creates_profile(
        self, service: UserService, fake_firestore: InMemoryFirestore, mock_auth_client: MagicMock
    ) -> None:
        profile = service.register("luis@ecobreak.test", "secret1", "Luis", "Gómez", telefono="300")

        assert profile.id == "new_uid"
        mock_auth_client.create_user.assert_called_once_with(
            email="luis@ecobreak.test", password="secret1", display_name="Luis Gómez"
        )
        stored = fake_firestore.docs("users")["new_uid"]
        assert stored["phoneNumber"] == "300"
        assert stored["avatarColor"] == "0xFF0067AC"

    def test_register_existing_email(
        self, service: UserService, mock_auth_client: MagicMock
    ) -> None:
        mock_auth_client.create_user.side_effect = auth.EmailAlreadyExistsError(
            "exists", None, None
        )

        with pytest.raises(BadRequestError):
            service.register("luis@ecobreak.test", "secret1", "Luis", "Gómez")

    def test_register_rolls_back_auth_user(
        self, service: UserService, mock_auth_client: MagicMock
    ) -> None:
        """A failed profile write deletes the Auth user."""
        service.user_repo = MagicMock()
        service.user_repo.create.side_effect = RuntimeError("firestore down")

        with pytest.raises(RuntimeError):
            service.register("luis@ecobreak.test", "secret1", "Luis", "Gómez")

        mock_auth_client.delete_user.assert_called_once_with("new_uid")

    def test_password_reset_unknown_email(
        self, service: UserService, mock_auth_client: MagicMock
    ) -> None:
        mock_auth_client.generate_password_reset_link.side_effect = auth.UserNotFoundError(
            "missing", None, None
        )

        with pytest.raises(NotFoundError):
            service.send_password_reset("nobody@ecobreak.test")

    def test_password_reset(self, service: UserService, mock_auth_client: MagicMock) -> None:
        service.send_password_reset("luis@ecobreak.test")

        mock_auth_client.generate_password_reset_link.assert_called_once_with(
            "luis@ecobreak.test"
        )
