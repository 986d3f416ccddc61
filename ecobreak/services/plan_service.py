"""Activity plan service."""

from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.plan import PLAN_AVAILABLE, PLAN_PAUSED, Plan, PlanActivity
from ecobreak.repositories.activity_repo import ActivityRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)


class PlanService:
    """Creates and maintains plans made of activities."""

    def __init__(self, plan_repo: PlanRepository, activity_repo: ActivityRepository) -> None:
        """PlanService initialization.

        Args:
            plan_repo: Plan repository
            activity_repo: Activity repository
        """
        self.plan_repo = plan_repo
        self.activity_repo = activity_repo

    def create_plan(self, name: str, description: str, activities: list[PlanActivity]) -> Plan:
        """Create an available plan.

        Raises:
            BadRequestError: No activities, or some do not exist.
        """
        self._check_activities(activities)

        now = utc_now_iso()
        plan = Plan(
            name=name,
            description=description,
            activities=activities,
            status=PLAN_AVAILABLE,
            created_at=now,
            updated_at=now,
        )
        self.plan_repo.create(plan)

        logger.info("plan_created", plan_id=plan.id, activities=len(activities))
        return plan

    def list_plans(self) -> list[Plan]:
        """All plans, newest first."""
        return self.plan_repo.find_all_newest_first()

    def update_plan(
        self,
        plan_id: str,
        changes: dict[str, Any],
        activities: list[PlanActivity] | None = None,
    ) -> Plan:
        """Merge changes into a plan.

        Args:
            plan_id: Plan ID.
            changes: Stored field names and values; ``None`` is ignored.
            activities: Replacement activity list, validated when given.

        Raises:
            NotFoundError: The plan does not exist.
            BadRequestError: Some activities do not exist.
        """
        if not self.plan_repo.exists(plan_id):
            raise NotFoundError("Plan no encontrado")

        updates = {key: value for key, value in changes.items() if value is not None}
        if activities is not None:
            self._check_activities(activities)
            updates["activities"] = [
                activity.model_dump(by_alias=True) for activity in activities
            ]

        self.plan_repo.update_fields(plan_id, updates)
        logger.info("plan_updated", plan_id=plan_id, fields=sorted(updates))

        plan = self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Plan no encontrado")
        return plan

    def delete_plan(self, plan_id: str) -> None:
        """Delete a plan.

        Raises:
            NotFoundError: The plan does not exist.
        """
        if not self.plan_repo.exists(plan_id):
            raise NotFoundError("Plan no encontrado")
        self.plan_repo.delete(plan_id)
        logger.info("plan_deleted", plan_id=plan_id)

    def pause_plan(self, plan_id: str) -> None:
        """Mark a plan as paused.

        Raises:
            NotFoundError: The plan does not exist.
        """
        if not self.plan_repo.exists(plan_id):
            raise NotFoundError("Plan no encontrado")
        self.plan_repo.update_fields(plan_id, {"status": PLAN_PAUSED})
        logger.info("plan_paused", plan_id=plan_id)

    def _check_activities(self, activities: list[PlanActivity]) -> None:
        if not activities:
            raise BadRequestError("El plan debe tener al menos una actividad")
        missing = self.activity_repo.missing_ids([a.activity_id for a in activities])
        if missing:
            raise BadRequestError("Una o más actividades no existen", details={"missing": missing})
