"""Exercise completion history service."""

from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso, utc_today
from ecobreak.models.history import ExerciseHistory
from ecobreak.repositories.history_repo import ExerciseHistoryRepository
from ecobreak.repositories.plan_repo import PlanRepository

logger = structlog.get_logger(__name__)

RECENT_HISTORY_DAYS = 5
NO_PLAN = "Sin plan"
NO_CATEGORY = "Sin categoría"


def _bucket() -> dict[str, Any]:
    return {"count": 0, "totalTime": 0.0, "totalRepeticiones": 0}


def _add(bucket: dict[str, Any], record: ExerciseHistory) -> None:
    bucket["count"] += 1
    bucket["totalTime"] += record.tiempo
    bucket["totalRepeticiones"] += record.repeticiones


class ExerciseHistoryService:
    """Records completed exercises and summarises them per user."""

    def __init__(self, history_repo: ExerciseHistoryRepository, plan_repo: PlanRepository) -> None:
        """ExerciseHistoryService initialization.

        Args:
            history_repo: Exercise history repository
            plan_repo: Plan repository, used to name plans
        """
        self.history_repo = history_repo
        self.plan_repo = plan_repo

    def create(self, record: ExerciseHistory) -> ExerciseHistory:
        """Store a completed exercise stamped with the server time."""
        record.created_at = utc_now_iso()
        self.history_repo.create(record)
        logger.info(
            "exercise_history_created",
            history_id=record.id,
            user_id=record.id_usuario,
            exercise_id=record.id_ejercicio,
        )
        return record

    def exercises_done_today(self, user_id: str, plan_id: str, group_id: str) -> list[str]:
        """Exercise IDs a user completed today within a plan and group."""
        today = utc_today()
        return [
            record.id_ejercicio
            for record in self.history_repo.find_for_plan(user_id, plan_id, group_id)
            if record.id_ejercicio and (record.created_at or "").startswith(today)
        ]

    def summarize(self, user_id: str, start_date: str, end_date: str) -> dict[str, Any]:
        """Group a user's history by day and by category.

        Args:
            user_id: User ID.
            start_date: First day (YYYY-MM-DD or ISO timestamp).
            end_date: Last day, inclusive.

        Returns:
            ``groupedByDay``, ``groupedByCategory`` and ``totalActivities``.
        """
        end = f"{end_date[:10]}T23:59:59.999Z"
        records = self.history_repo.find_by_user(user_id, start=start_date[:10], end=end)

        by_day: dict[str, dict[str, Any]] = {}
        by_category: dict[str, dict[str, Any]] = {}
        for record in records:
            day = (record.created_at or "")[:10]
            _add(by_day.setdefault(day, _bucket()), record)
            _add(by_category.setdefault(record.categoria or NO_CATEGORY, _bucket()), record)

        return {
            "groupedByDay": by_day,
            "groupedByCategory": by_category,
            "totalActivities": len(records),
        }

    def recent(self, user_id: str) -> list[dict[str, Any]]:
        """The last five days of a user's history, newest first."""
        now = datetime.now(UTC)
        start = (now - timedelta(days=RECENT_HISTORY_DAYS - 1)).date().isoformat()
        records = self.history_repo.find_by_user(user_id, start=start, end=utc_now_iso())

        plan_ids = list(dict.fromkeys(r.id_plan for r in records if r.id_plan))
        names = {plan.id: plan.display_name for plan in self.plan_repo.get_many(plan_ids)}

        return [
            {
                "id": record.id,
                "nombre": record.nombre,
                "categoria": record.categoria,
                "tiempo": record.tiempo,
                "finalizacion": record.created_at,
                "planName": names.get(record.id_plan) or NO_PLAN,
            }
            for record in records
        ]
