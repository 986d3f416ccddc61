"""Group process upload, synchronization to users and daily activities.

A process is a plans document with a ``groupId``. Uploading one copies it
into ``users/{uid}/assignedProcesses`` for every member of the group.
"""

from collections.abc import Callable
from typing import Any

import structlog

from ecobreak.adapters.firestore_client import WriteOp
from ecobreak.models.base import utc_now_iso, utc_today
from ecobreak.models.plan import Plan
from ecobreak.models.process_group import (
    OPEN_ASSIGNMENT_STATUSES,
    AssignedProcess,
    AssignmentStatus,
    ProcessGroup,
)
from ecobreak.models.user import DEFAULT_AVATAR_COLOR
from ecobreak.repositories.category_repo import CategoryRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import (
    AssignedProcessRepository,
    ProcessGroupRepository,
)
from ecobreak.services.category_service import CategoryService
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)

AssignmentRepoFactory = Callable[[str], AssignedProcessRepository]


class ProcessService:
    """Uploads processes and keeps user assignments in sync."""

    def __init__(
        self,
        plan_repo: PlanRepository,
        category_repo: CategoryRepository,
        group_repo: ProcessGroupRepository,
        assignments_for: AssignmentRepoFactory,
        category_service: CategoryService,
    ) -> None:
        """ProcessService initialization.

        Args:
            plan_repo: Plan repository (processes live in plans)
            category_repo: Category repository
            group_repo: Process group repository
            assignments_for: Builds the assignment repository of a user
            category_service: Resolves categories with their exercises
        """
        self.plan_repo = plan_repo
        self.category_repo = category_repo
        self.group_repo = group_repo
        self.assignments_for = assignments_for
        self.category_service = category_service

    # -------------------------------------------------------------------------
    # Admin side
    # -------------------------------------------------------------------------

    def upload_process(
        self,
        group_id: str,
        nombre: str,
        categories: list[str],
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> Plan:
        """Create a process for a group and assign it to every member.

        When the member sync fails the process and any written assignments
        are removed before the error propagates.

        Raises:
            BadRequestError: No categories were given.
            NotFoundError: A category or the group does not exist.
        """
        if not categories:
            raise BadRequestError("Se requiere al menos una categoría")

        missing = self.category_repo.missing_ids(categories)
        if missing:
            raise NotFoundError(
                f"Categorías no encontradas: {', '.join(missing)}",
                details={"missing": missing},
            )

        group = self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Grupo no encontrado")

        now = utc_now_iso()
        process = Plan(
            id=self.plan_repo.new_id(),
            group_id=group_id,
            nombre=nombre,
            categories=categories,
            start_date=start_date,
            end_date=end_date,
            estado=False,
            created_at=now,
            updated_at=now,
        )
        self.plan_repo.commit([self.plan_repo.set_op(process)])

        try:
            synced = self.sync_to_members(process, group)
        except Exception:
            logger.exception("process_upload_failed", process_id=process.id, group_id=group_id)
            try:
                self._revert_upload(process, group)
            except Exception:
                logger.exception("process_upload_revert_failed", process_id=process.id)
            raise

        logger.info("process_uploaded", process_id=process.id, group_id=group_id, synced=synced)
        return process

    def sync_to_members(self, process: Plan, group: ProcessGroup) -> int:
        """Write a pending assignment of the process for each group member.

        Returns:
            Number of members synced.
        """
        if process.id is None:
            raise ValueError("Process must be stored before syncing")

        now = utc_now_iso()
        ops: list[WriteOp] = []
        members = [uid for uid in group.members if uid]
        for uid in members:
            assignment = self._assignment(process, AssignmentStatus.PENDING, now)
            ops.append(self.assignments_for(uid).set_op(assignment))
        self.plan_repo.commit(ops)
        return len(members)

    def assign_process(self, process_id: str, user_id: str) -> AssignedProcess:
        """Assign a process to a single user as active.

        Raises:
            NotFoundError: The process does not exist.
        """
        process = self._get_process(process_id)
        assignment = self._assignment(process, AssignmentStatus.ACTIVE, utc_now_iso())
        self.assignments_for(user_id).create(assignment)
        logger.info("process_assigned", process_id=process_id, user_id=user_id)
        return assignment

    def list_active_processes(self) -> list[dict[str, Any]]:
        """Processes with an active schedule, newest start first."""
        names = {group.id: group.name for group in self.group_repo.find_all()}
        processes = sorted(
            self.plan_repo.find_active_processes(),
            key=lambda p: p.start_date or p.created_at or "",
            reverse=True,
        )
        return [
            {**p.to_response(), "groupName": names.get(p.group_id, "Grupo no encontrado")}
            for p in processes
        ]

    def deactivate_process(self, process_id: str) -> int:
        """Stop a process and mark every member assignment inactive.

        Returns:
            Number of assignments updated.

        Raises:
            NotFoundError: The process does not exist.
        """
        process = self._get_process(process_id)
        group = self.group_repo.get_by_id(process.group_id or "")
        members = [uid for uid in (group.members if group else []) if uid]

        # members who joined after the upload have no copy to update
        assigned = [uid for uid in members if self.assignments_for(uid).exists(process_id)]

        ops = [self.plan_repo.update_op(process_id, {"estado": False})]
        ops.extend(
            self.assignments_for(uid).update_op(
                process_id, {"status": AssignmentStatus.INACTIVE.value}
            )
            for uid in assigned
        )
        self.plan_repo.commit(ops)

        logger.info(
            "process_deactivated",
            process_id=process_id,
            members=len(members),
            assignments=len(assigned),
        )
        return len(assigned)

    # -------------------------------------------------------------------------
    # User side
    # -------------------------------------------------------------------------

    def list_assigned(self, user_id: str) -> list[AssignedProcess]:
        """A user's assignments, most recent first."""
        return self.assignments_for(user_id).find_newest_first()

    def update_assignment_status(
        self, user_id: str, process_id: str, status: str, progress: int | None = None
    ) -> AssignedProcess:
        """Update the status (and optionally progress) of an assignment.

        Raises:
            NotFoundError: The user has no such assignment.
        """
        repo = self.assignments_for(user_id)
        if not repo.exists(process_id):
            raise NotFoundError("Proceso asignado no encontrado")

        fields: dict[str, Any] = {"status": status}
        if progress is not None:
            fields["progress"] = progress
        repo.update_fields(process_id, fields)

        logger.info("assignment_status_updated", user_id=user_id, process_id=process_id, status=status)
        updated = repo.get_by_id(process_id)
        if updated is None:
            raise NotFoundError("Proceso asignado no encontrado")
        return updated

    def today_activities(self, user_id: str, today: str | None = None) -> list[dict[str, Any]]:
        """Open assignments whose date window covers today, with exercises.

        The window starts at the beginning of ``startDate`` and ends at the
        end of ``endDate``; a missing end date leaves it open.

        Args:
            user_id: User ID.
            today: Day as YYYY-MM-DD (defaults to the current UTC day).

        Returns:
            One entry per assignment.
        """
        day = today or utc_today()
        assignments = self.assignments_for(user_id).find_by_statuses(list(OPEN_ASSIGNMENT_STATUSES))

        activities = []
        for assignment in assignments:
            if not _covers(assignment, day):
                continue
            categories = self.category_service.get_categories_with_exercises(assignment.categories)
            activities.append(
                {
                    "id": assignment.id,
                    "processId": assignment.process_id,
                    "title": assignment.nombre or "Proceso",
                    "categories": [
                        {
                            "id": category.id,
                            "nombre": category.nombre,
                            "color": category.color or DEFAULT_AVATAR_COLOR,
                            "ejercicios": [e.to_response() for e in category.ejercicios],
                        }
                        for category in categories
                    ],
                    "startDate": assignment.start_date,
                    "endDate": assignment.end_date,
                    "status": assignment.status,
                    "progress": assignment.progress,
                }
            )
        logger.info("today_activities_resolved", user_id=user_id, count=len(activities))
        return activities

    def assignment_summary(self, user_id: str) -> dict[str, Any]:
        """Debug view of a user's assignments."""
        assignments = self.list_assigned(user_id)
        return {
            "userId": user_id,
            "processCount": len(assignments),
            "processes": [
                {
                    "id": a.id,
                    "status": a.status,
                    "startDate": a.start_date,
                    "endDate": a.end_date,
                    "categoryCount": len(a.categories),
                }
                for a in assignments
            ],
        }

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_process(self, process_id: str) -> Plan:
        process = self.plan_repo.get_by_id(process_id)
        if process is None or not process.is_process:
            raise NotFoundError("Proceso no encontrado")
        return process

    @staticmethod
    def _assignment(process: Plan, status: AssignmentStatus, now: str) -> AssignedProcess:
        return AssignedProcess(
            id=process.id,
            process_id=process.id or "",
            group_id=process.group_id,
            nombre=process.nombre,
            categories=process.categories,
            start_date=process.start_date,
            end_date=process.end_date,
            status=status.value,
            progress=0,
            assigned_at=now,
            updated_at=now,
        )

    def _revert_upload(self, process: Plan, group: ProcessGroup) -> None:
        ops = [self.plan_repo.delete_op(process.id or "")]
        ops.extend(
            self.assignments_for(uid).delete_op(process.id or "") for uid in group.members if uid
        )
        self.plan_repo.commit(ops)
        logger.warning("process_upload_reverted", process_id=process.id)


def _covers(assignment: AssignedProcess, day: str) -> bool:
    if assignment.start_date and assignment.start_date[:10] > day:
        return False
    if assignment.end_date and assignment.end_date[:10] < day:
        return False
    return True
