"""Notification plan service.

A notification plan schedules processes on given days. Scheduling a process
activates it (``estado``) until the plan's end date (``fechaFin``).
"""

from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.notification import NotificationPlan
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)


class NotificationPlanService:
    """Creates notification plans and keeps the scheduled plans in step."""

    def __init__(
        self, notification_plan_repo: NotificationPlanRepository, plan_repo: PlanRepository
    ) -> None:
        """NotificationPlanService initialization.

        Args:
            notification_plan_repo: Notification plan repository
            plan_repo: Plan repository
        """
        self.notification_plan_repo = notification_plan_repo
        self.plan_repo = plan_repo

    def create(self, notification_plan: NotificationPlan) -> NotificationPlan:
        """Store an active notification plan and activate its plans.

        Every referenced plan that exists gets ``estado: true`` and
        ``fechaFin`` set to the schedule's end date.

        Raises:
            BadRequestError: The start date is after the end date.
        """
        if notification_plan.start_date > notification_plan.end_date:
            raise BadRequestError("La fecha de inicio debe ser anterior a la fecha de fin")

        now = utc_now_iso()
        notification_plan.id = self.notification_plan_repo.new_id()
        notification_plan.is_active = True
        notification_plan.created_at = now
        notification_plan.updated_at = now

        ops = self._plan_ops(
            notification_plan.plan_ids(),
            {"estado": True, "fechaFin": notification_plan.end_date},
        )
        ops.append(self.notification_plan_repo.set_op(notification_plan))
        self.notification_plan_repo.commit(ops)

        logger.info(
            "notification_plan_created",
            notification_plan_id=notification_plan.id,
            plans=len(ops) - 1,
        )
        return notification_plan

    def list_plans(self) -> list[NotificationPlan]:
        """All notification plans, newest first."""
        return self.notification_plan_repo.find_all_newest_first()

    def update_status(self, notification_plan_id: str, is_active: bool) -> NotificationPlan:
        """Activate or deactivate a schedule together with its plans.

        Raises:
            NotFoundError: The notification plan does not exist.
        """
        notification_plan = self.notification_plan_repo.get_by_id(notification_plan_id)
        if notification_plan is None:
            raise NotFoundError("Plan no encontrado")

        ops = self._plan_ops(notification_plan.plan_ids(), {"estado": is_active})
        ops.append(
            self.notification_plan_repo.update_op(notification_plan_id, {"isActive": is_active})
        )
        self.notification_plan_repo.commit(ops)

        logger.info(
            "notification_plan_status_updated",
            notification_plan_id=notification_plan_id,
            is_active=is_active,
        )
        notification_plan.is_active = is_active
        notification_plan.updated_at = utc_now_iso()
        return notification_plan

    def delete(self, notification_plan_id: str) -> None:
        """Delete a notification plan.

        Raises:
            NotFoundError: The notification plan does not exist.
        """
        if not self.notification_plan_repo.exists(notification_plan_id):
            raise NotFoundError("Plan no encontrado")
        self.notification_plan_repo.delete(notification_plan_id)
        logger.info("notification_plan_deleted", notification_plan_id=notification_plan_id)

    def expire(self, today_key: str) -> int:
        """Deactivate running schedules that ended before a day.

        Args:
            today_key: Day key (``YYYY-MM-DDT00:00:00.000``).

        Returns:
            Number of schedules deactivated.
        """
        expired = self.notification_plan_repo.find_expired(today_key)
        ops: list[Any] = []
        for notification_plan in expired:
            ops.extend(self._plan_ops(notification_plan.plan_ids(), {"estado": False}))
            ops.append(
                self.notification_plan_repo.update_op(notification_plan.id or "", {"isActive": False})
            )
        self.notification_plan_repo.commit(ops)

        if expired:
            logger.info("notification_plans_expired", count=len(expired))
        return len(expired)

    def cleanup_expired(self, today_key: str) -> int:
        """Delete schedules whose end date is before a day.

        Returns:
            Number of deleted schedules.
        """
        ended = self.notification_plan_repo.find_ended_before(today_key)
        self.notification_plan_repo.commit(
            [self.notification_plan_repo.delete_op(np.id) for np in ended if np.id]
        )
        logger.info("notification_plans_cleaned", deleted=len(ended))
        return len(ended)

    def _plan_ops(self, plan_ids: list[str], fields: dict[str, Any]) -> list[Any]:
        existing = self.plan_repo.get_many(plan_ids)
        missing = set(plan_ids) - {plan.id for plan in existing}
        if missing:
            logger.warning("scheduled_plans_missing", plan_ids=sorted(missing))
        return [self.plan_repo.update_op(plan.id, fields) for plan in existing if plan.id]
