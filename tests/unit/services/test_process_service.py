"""Tests for ProcessService."""

from unittest.mock import patch

import pytest

from ecobreak.repositories.category_repo import CategoryRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import (
    AssignedProcessRepository,
    ProcessGroupRepository,
)
from ecobreak.services.exceptions import BadRequestError, NotFoundError
from ecobreak.services.process_service import ProcessService
from tests.unit.services.test_category_service import build_category_service
from tests.utils import InMemoryFirestore


def assignments(firestore: InMemoryFirestore, user_id: str) -> dict:
    return firestore.docs(f"users/{user_id}/assignedProcesses")


class TestProcessService:
    """Tests for ProcessService."""

    @pytest.fixture
    def firestore(self, fake_firestore: InMemoryFirestore) -> InMemoryFirestore:
        """Group g1 with two members and two categories."""
        fake_firestore.seed(
            "processGroups", "g1", {"name": "Ventas", "color": "#112233", "members": ["u1", "u2"]}
        )
        fake_firestore.seed("categories", "cat_1", {"nombre": "Cuello", "color": "0xFF00FF00"})
        fake_firestore.seed("categories", "cat_2", {"nombre": "Piernas"})
        fake_firestore.seed("exercises", "ex_1", {"nombre": "Giro"})
        fake_firestore.seed(
            "categoriesXexercise", "l1", {"categoriaId": "cat_1", "actividadId": "ex_1"}
        )
        return fake_firestore

    @pytest.fixture
    def service(self, firestore: InMemoryFirestore) -> ProcessService:
        return ProcessService(
            plan_repo=PlanRepository(firestore),
            category_repo=CategoryRepository(firestore),
            group_repo=ProcessGroupRepository(firestore),
            assignments_for=lambda uid: AssignedProcessRepository(firestore, uid),
            category_service=build_category_service(firestore),
        )

    def test_upload_process_syncs_members(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        """Every member should receive a pending copy keyed by the process ID."""
        process = service.upload_process(
            "g1", "Semana 1", ["cat_1", "cat_2"], "2025-01-01", "2025-01-07"
        )

        assert process.id in firestore.docs("plans")
        assert firestore.docs("plans")[process.id]["estado"] is False
        for uid in ("u1", "u2"):
            copy = assignments(firestore, uid)[process.id]
            assert copy["status"] == "pending"
            assert copy["categories"] == ["cat_1", "cat_2"]
            assert copy["progress"] == 0

    def test_upload_requires_categories(self, service: ProcessService) -> None:
        with pytest.raises(BadRequestError):
            service.upload_process("g1", "Vacío", [])

    def test_upload_unknown_categories(self, service: ProcessService) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            service.upload_process("g1", "Semana", ["cat_1", "cat_9"])
        assert exc_info.value.details == {"missing": ["cat_9"]}

    def test_upload_unknown_group(self, service: ProcessService) -> None:
        with pytest.raises(NotFoundError, match="Grupo"):
            service.upload_process("g9", "Semana", ["cat_1"])

    def test_upload_reverted_when_sync_fails(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        """A failed sync should leave no process behind."""
        with (
            patch.object(service, "sync_to_members", side_effect=RuntimeError("boom")),
            pytest.raises(RuntimeError),
        ):
            service.upload_process("g1", "Semana 1", ["cat_1"])

        assert firestore.docs("plans") == {}
        assert assignments(firestore, "u1") == {}

    def test_assign_process(self, service: ProcessService, firestore: InMemoryFirestore) -> None:
        process = service.upload_process("g1", "Semana 1", ["cat_1"])

        assignment = service.assign_process(process.id or "", "u3")

        assert assignment.status == "active"
        assert assignments(firestore, "u3")[process.id]["status"] == "active"

    def test_assign_non_process(self, service: ProcessService, firestore: InMemoryFirestore) -> None:
        firestore.seed("plans", "plain", {"name": "Plan"})
        with pytest.raises(NotFoundError):
            service.assign_process("plain", "u1")

    def test_deactivate_process(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        process = service.upload_process("g1", "Semana 1", ["cat_1"])

        updated = service.deactivate_process(process.id or "")

        assert updated == 2
        assert firestore.docs("plans")[process.id]["estado"] is False
        assert assignments(firestore, "u1")[process.id]["status"] == "inactive"

    def test_deactivate_skips_members_added_after_upload(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        """A member without a copy of the process should not get a partial one."""
        process = service.upload_process("g1", "Semana 1", ["cat_1"])
        firestore.docs("processGroups")["g1"]["members"].append("u3")

        updated = service.deactivate_process(process.id or "")

        assert updated == 2
        assert assignments(firestore, "u3") == {}
        with pytest.raises(NotFoundError):
            service.update_assignment_status("u3", process.id or "", "active")
        assert service.today_activities("u3") == []

    def test_upload_keeps_sync_error_when_revert_fails(self, service: ProcessService) -> None:
        with (
            patch.object(service, "sync_to_members", side_effect=RuntimeError("sync failed")),
            patch.object(service, "_revert_upload", side_effect=RuntimeError("revert failed")),
            pytest.raises(RuntimeError, match="sync failed"),
        ):
            service.upload_process("g1", "Semana 1", ["cat_1"])

    def test_list_active_processes(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        firestore.seed("plans", "p_old", {"groupId": "g1", "estado": True, "startDate": "2025-01-01"})
        firestore.seed("plans", "p_new", {"groupId": "g1", "estado": True, "startDate": "2025-02-01"})
        firestore.seed("plans", "p_orphan", {"groupId": "gone", "estado": True, "startDate": "2024-01-01"})

        processes = service.list_active_processes()

        assert [p["id"] for p in processes] == ["p_new", "p_old", "p_orphan"]
        assert processes[0]["groupName"] == "Ventas"
        assert processes[2]["groupName"] == "Grupo no encontrado"

    def test_update_assignment_status(
        self, service: ProcessService, firestore: InMemoryFirestore
    ) -> None:
        process = service.upload_process("g1", "Semana 1", ["cat_1"])

        updated = service.update_assignment_status("u1", process.id or "", "completed", 100)

        assert updated.status == "completed"
        assert updated.progress == 100

    def test_update_missing_assignment(self, service: ProcessService) -> None:
        with pytest.raises(NotFoundError):
            service.update_assignment_status("u1", "missing", "completed")


class TestTodayActivities:
    """Tests for today's activities of a user."""

    @pytest.fixture
    def service(self, fake_firestore: InMemoryFirestore) -> ProcessService:
        fake_firestore.seed("categories", "cat_1", {"nombre": "Cuello"})
        fake_firestore.seed("exercises", "ex_1", {"nombre": "Giro"})
        fake_firestore.seed(
            "categoriesXexercise", "l1", {"categoriaId": "cat_1", "actividadId": "ex_1"}
        )
        path = "users/u1/assignedProcesses"
        base = {
            "categories": ["cat_1"],
            "nombre": "Semana",
            "assignedAt": "2025-01-01T00:00:00.000Z",
        }
        fake_firestore.seed(
            path,
            "running",
            {**base, "processId": "running", "status": "active",
             "startDate": "2025-01-01T00:00:00.000Z", "endDate": "2025-01-10T00:00:00.000Z"},
        )
        fake_firestore.seed(
            path,
            "open_ended",
            {**base, "processId": "open_ended", "status": "pending", "startDate": "2025-01-05"},
        )
        fake_firestore.seed(
            path,
            "future",
            {**base, "processId": "future", "status": "pending", "startDate": "2025-02-01"},
        )
        fake_firestore.seed(
            path,
            "done",
            {**base, "processId": "done", "status": "completed", "startDate": "2025-01-01"},
        )
        return ProcessService(
            plan_repo=PlanRepository(fake_firestore),
            category_repo=CategoryRepository(fake_firestore),
            group_repo=ProcessGroupRepository(fake_firestore),
            assignments_for=lambda uid: AssignedProcessRepository(fake_firestore, uid),
            category_service=build_category_service(fake_firestore),
        )

    def test_only_open_assignments_covering_today(self, service: ProcessService) -> None:
        activities = service.today_activities("u1", today="2025-01-10")

        assert sorted(a["id"] for a in activities) == ["open_ended", "running"]

    def test_activity_shape(self, service: ProcessService) -> None:
        activity = next(
            a for a in service.today_activities("u1", today="2025-01-06") if a["id"] == "running"
        )

        assert activity["title"] == "Semana"
        category = activity["categories"][0]
        assert category["color"] == "0xFF0067AC"
        assert [e["nombre"] for e in category["ejercicios"]] == ["Giro"]

    def test_assignment_summary(self, service: ProcessService) -> None:
        summary = service.assignment_summary("u1")
        assert summary["processCount"] == 4
