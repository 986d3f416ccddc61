"""Category service.

Categories link to exercises through ``categoriesXexercise``. Deleting a
category cascades to the processes that use it and to the notification
plans that schedule those processes.
"""

from typing import Any

import structlog

from ecobreak.adapters.firestore_client import WriteOp
from ecobreak.models.base import utc_now_iso, utc_today
from ecobreak.models.category import (
    CATEGORY_PAUSED,
    Category,
    CategoryExercise,
    CategoryHistory,
    CategoryWithExercises,
)
from ecobreak.repositories.category_repo import (
    CategoryExerciseRepository,
    CategoryHistoryRepository,
    CategoryRepository,
)
from ecobreak.repositories.exercise_repo import ExerciseRepository
from ecobreak.repositories.notification_repo import NotificationPlanRepository
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.services.exceptions import BadRequestError, NotFoundError

logger = structlog.get_logger(__name__)


class CategoryService:
    """Category CRUD, exercise links and per-user category history."""

    def __init__(
        self,
        category_repo: CategoryRepository,
        link_repo: CategoryExerciseRepository,
        exercise_repo: ExerciseRepository,
        plan_repo: PlanRepository,
        notification_plan_repo: NotificationPlanRepository,
        history_repo: CategoryHistoryRepository,
    ) -> None:
        """CategoryService initialization.

        Args:
            category_repo: Category repository
            link_repo: Category-exercise link repository
            exercise_repo: Exercise repository
            plan_repo: Plan repository
            notification_plan_repo: Notification plan repository
            history_repo: Category history repository
        """
        self.category_repo = category_repo
        self.link_repo = link_repo
        self.exercise_repo = exercise_repo
        self.plan_repo = plan_repo
        self.notification_plan_repo = notification_plan_repo
        self.history_repo = history_repo

    def create_category(self, category: Category, exercise_ids: list[str]) -> CategoryWithExercises:
        """Create a category and link it to exercises.

        Args:
            category: Category without id or timestamps.
            exercise_ids: Exercises to link, in order.

        Returns:
            The created category with its exercises.

        Raises:
            BadRequestError: An exercise reference is empty.
        """
        self._check_exercise_ids(exercise_ids)

        now = utc_now_iso()
        category.created_at = now
        category.updated_at = now
        category_id = self.category_repo.create(category)

        self.link_repo.commit(self._link_ops(category_id, exercise_ids))

        logger.info("category_created", category_id=category_id, exercises=len(exercise_ids))
        return self._with_exercises(category)

    def list_categories(self) -> list[CategoryWithExercises]:
        """All categories, newest first, each with its exercises."""
        return [self._with_exercises(c) for c in self.category_repo.find_all_newest_first()]

    def update_category(
        self,
        category_id: str,
        changes: dict[str, Any],
        exercise_ids: list[str] | None = None,
    ) -> CategoryWithExercises:
        """Merge changes into a category and optionally replace its exercises.

        Args:
            category_id: Category ID.
            changes: Stored field names and new values; ``None`` values are
                ignored.
            exercise_ids: New exercise list. ``None`` or empty keeps the
                current links.

        Returns:
            The updated category with its exercises.

        Raises:
            NotFoundError: The category does not exist.
            BadRequestError: An exercise reference is empty.
        """
        if self.category_repo.get_by_id(category_id) is None:
            raise NotFoundError("Categoría no encontrada")

        if exercise_ids:
            self._check_exercise_ids(exercise_ids)
            ops = [
                self.link_repo.delete_op(link.id) for link in self._links(category_id) if link.id
            ]
            ops.extend(self._link_ops(category_id, exercise_ids))
            self.link_repo.commit(ops)

        updates = {key: value for key, value in changes.items() if value is not None}
        self.category_repo.update_fields(category_id, updates)

        logger.info("category_updated", category_id=category_id, fields=sorted(updates))
        updated = self.category_repo.get_by_id(category_id)
        if updated is None:
            raise NotFoundError("Categoría no encontrada")
        return self._with_exercises(updated)

    def delete_category(self, category_id: str) -> dict[str, int]:
        """Delete a category and everything that depends on it.

        Order: exercise links, processes that include the category,
        notification plans that schedule any of those processes, then the
        category itself.

        Args:
            category_id: Category ID.

        Returns:
            Counts of deleted dependants.

        Raises:
            NotFoundError: The category does not exist.
        """
        if not self.category_repo.exists(category_id):
            raise NotFoundError("Categoría no encontrada")

        links = self._links(category_id)
        plans = self.plan_repo.find_containing_category(category_id)
        plan_ids = {plan.id for plan in plans}
        notification_plans = [
            notification_plan
            for notification_plan in self.notification_plan_repo.find_all()
            if plan_ids.intersection(notification_plan.plan_ids())
        ]

        ops: list[WriteOp] = [self.link_repo.delete_op(link.id) for link in links if link.id]
        ops.extend(self.plan_repo.delete_op(plan.id) for plan in plans if plan.id)
        ops.extend(
            self.notification_plan_repo.delete_op(np.id) for np in notification_plans if np.id
        )
        ops.append(self.category_repo.delete_op(category_id))
        self.category_repo.commit(ops)

        result = {
            "links": len(links),
            "plans": len(plans),
            "notification_plans": len(notification_plans),
        }
        logger.info("category_deleted", category_id=category_id, **result)
        return result

    def pause_category(self, category_id: str) -> None:
        """Mark a category as paused.

        Raises:
            NotFoundError: The category does not exist.
        """
        if not self.category_repo.exists(category_id):
            raise NotFoundError("Categoría no encontrada")
        self.category_repo.update_fields(category_id, {"status": CATEGORY_PAUSED})
        logger.info("category_paused", category_id=category_id)

    def get_categories_with_exercises(self, category_ids: list[str]) -> list[CategoryWithExercises]:
        """Categories in the requested order with their exercises.

        Unknown IDs are skipped.
        """
        return [self._with_exercises(c) for c in self.category_repo.get_many(category_ids)]

    def get_recent_for_group(self, group_id: str) -> dict[str, Any]:
        """First category of the group's process that ends soonest.

        Args:
            group_id: Process group ID.

        Returns:
            ``{"categorias": [...], "proceso": plan_id}``.

        Raises:
            BadRequestError: No upcoming process, or it has no category.
        """
        plan = self.plan_repo.find_next_ending(group_id, utc_today())
        if plan is None:
            raise BadRequestError("No se encontró un plan con fechaFin próxima")
        if not plan.categories:
            raise BadRequestError("La categoría no está asociada a este plan")

        categorias = self.get_categories_with_exercises([plan.categories[0]])
        return {"categorias": categorias, "proceso": plan.id}

    # -------------------------------------------------------------------------
    # Category history
    # -------------------------------------------------------------------------

    def save_history(self, user_id: str, process_id: str, group_id: str | None = None) -> bool:
        """Record that a user completed a process today.

        At most one record exists per user, process, group and day.

        Returns:
            True if a record was written, False if one already existed.
        """
        today = utc_today()
        if self.history_repo.find_for_day(user_id, today, group_id, process_id):
            logger.info("category_history_exists", user_id=user_id, process_id=process_id)
            return False

        self.history_repo.create(
            CategoryHistory(
                user_id=user_id,
                process_id=process_id,
                group_id=group_id,
                create_at=today,
            )
        )
        logger.info("category_history_saved", user_id=user_id, process_id=process_id)
        return True

    def get_next_for_user(self, user_id: str, group_id: str | None = None) -> dict[str, Any]:
        """The next active process of a group the user has not done today.

        Returns:
            ``{"categorias": [...], "proceso": plan_id}``; empty categories and
            a null process when nothing remains.
        """
        used = {
            record.process_id
            for record in self.history_repo.find_for_day(user_id, utc_today(), group_id)
        }
        for plan in self.plan_repo.find_active_by_group(group_id):
            if plan.id not in used:
                return {
                    "categorias": self.get_categories_with_exercises(plan.categories),
                    "proceso": plan.id,
                }
        return {"categorias": [], "proceso": None}

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def exercises_for(self, category_ids: list[str]) -> dict[str, list[str]]:
        """Exercise IDs linked to each category."""
        result: dict[str, list[str]] = {category_id: [] for category_id in category_ids}
        for link in self.link_repo.find_by_categories(category_ids):
            result.setdefault(link.categoria_id, []).append(link.actividad_id)
        return result

    def _links(self, category_id: str) -> list[CategoryExercise]:
        return self.link_repo.find_by_category(category_id)

    def _link_ops(self, category_id: str, exercise_ids: list[str]) -> list[WriteOp]:
        ops = []
        for order, exercise_id in enumerate(exercise_ids):
            link = CategoryExercise(
                id=self.link_repo.new_id(),
                categoria_id=category_id,
                actividad_id=exercise_id,
                order=order,
            )
            ops.append(self.link_repo.set_op(link))
        return ops

    def _with_exercises(self, category: Category) -> CategoryWithExercises:
        exercise_ids = [link.actividad_id for link in self._links(category.id or "")]
        exercises = self.exercise_repo.get_many(list(dict.fromkeys(exercise_ids)))
        return CategoryWithExercises(**category.model_dump(), ejercicios=exercises)

    @staticmethod
    def _check_exercise_ids(exercise_ids: list[str]) -> None:
        if any(not exercise_id for exercise_id in exercise_ids):
            raise BadRequestError("Todas las actividades deben tener un ID válido")
