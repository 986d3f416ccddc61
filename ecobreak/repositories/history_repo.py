"""Repository for exercise completion history."""

from ecobreak.models.history import ExerciseHistory
from ecobreak.repositories.base import BaseRepository


class ExerciseHistoryRepository(BaseRepository[ExerciseHistory]):
    """Exercise history repository.

    Firestore Collection: exercisesHistory
    """

    collection_name = "exercisesHistory"
    model_class = ExerciseHistory

    def find_by_user(
        self,
        user_id: str,
        start: str | None = None,
        end: str | None = None,
    ) -> list[ExerciseHistory]:
        """A user's history within an optional ``createdAt`` range.

        Args:
            user_id: User ID.
            start: Inclusive lower bound (ISO string prefix).
            end: Inclusive upper bound (ISO string).

        Returns:
            Records ordered by ``createdAt``, newest first.
        """
        filters: list[tuple[str, str, object]] = [("idUsuario", "==", user_id)]
        if start is not None:
            filters.append(("createdAt", ">=", start))
        if end is not None:
            filters.append(("createdAt", "<=", end))
        return self.find_by(filters, order_by="createdAt", descending=True)

    def find_in_range(self, start: str, end: str) -> list[ExerciseHistory]:
        """Every user's history within a ``createdAt`` range, newest first."""
        return self.find_by(
            [("createdAt", ">=", start), ("createdAt", "<=", end)],
            order_by="createdAt",
            descending=True,
        )

    def find_for_plan(self, user_id: str, plan_id: str, group_id: str) -> list[ExerciseHistory]:
        """A user's records for one plan within a group."""
        return self.find_by(
            [
                ("idUsuario", "==", user_id),
                ("idPlan", "==", plan_id),
                ("idGrupo", "==", group_id),
            ]
        )
