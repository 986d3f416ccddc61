"""Repository for plans and group processes."""

from ecobreak.models.plan import Plan
from ecobreak.repositories.base import BaseRepository


class PlanRepository(BaseRepository[Plan]):
    """Plan repository.

    Firestore Collection: plans
    """

    collection_name = "plans"
    model_class = Plan

    def find_all_newest_first(self) -> list[Plan]:
        """All plans ordered by creation time, newest first."""
        return self.find_all(order_by="createdAt", descending=True)

    def find_by_group(self, group_id: str) -> list[Plan]:
        """Processes scheduled for a group."""
        return self.find_by([("groupId", "==", group_id)])

    def find_active_by_group(self, group_id: str | None) -> list[Plan]:
        """Processes of a group whose notification schedule is active."""
        return self.find_by([("groupId", "==", group_id), ("estado", "==", True)])

    def find_containing_category(self, category_id: str) -> list[Plan]:
        """Processes whose categories include the given category."""
        return self.find_by([("categories", "array_contains", category_id)])

    def find_next_ending(self, group_id: str, from_day: str) -> Plan | None:
        """The group's process whose ``fechaFin`` is the closest on or after a day.

        Args:
            group_id: Process group ID.
            from_day: Day as YYYY-MM-DD.

        Returns:
            The process, or None.
        """
        plans = self.find_by(
            [("groupId", "==", group_id), ("fechaFin", ">=", from_day)],
            order_by="fechaFin",
            limit=1,
        )
        return plans[0] if plans else None

    def find_active_processes(self) -> list[Plan]:
        """Processes currently attached to an active schedule."""
        return [plan for plan in self.find_by([("estado", "==", True)]) if plan.is_process]
