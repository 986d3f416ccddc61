"""Process group service."""

from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from ecobreak.models.base import utc_now_iso
from ecobreak.models.plan import Plan
from ecobreak.models.process_group import ProcessGroup
from ecobreak.models.user import UserProfile
from ecobreak.repositories.plan_repo import PlanRepository
from ecobreak.repositories.process_group_repo import ProcessGroupRepository
from ecobreak.repositories.user_repo import UserRepository
from ecobreak.services.exceptions import NotFoundError

logger = structlog.get_logger(__name__)

RECENT_PLANS_DAYS = 30


def member_summary(user: UserProfile) -> dict[str, Any]:
    """Compact member view used in group listings."""
    return {
        "id": user.id,
        "name": user.full_name,
        "email": user.email or "",
        "avatarColor": user.avatar_color or "",
        "telefono": user.phone_number or "",
    }


class ProcessGroupService:
    """Manages groups of users and the processes scheduled for them."""

    def __init__(
        self,
        group_repo: ProcessGroupRepository,
        user_repo: UserRepository,
        plan_repo: PlanRepository,
    ) -> None:
        """ProcessGroupService initialization.

        Args:
            group_repo: Process group repository
            user_repo: User repository
            plan_repo: Plan repository
        """
        self.group_repo = group_repo
        self.user_repo = user_repo
        self.plan_repo = plan_repo

    def list_groups(self) -> list[dict[str, Any]]:
        """All groups, newest first, with members and processes resolved."""
        groups = self.group_repo.find_all(order_by="createdAt", descending=True)
        return [self._expand(group) for group in groups]

    def create_group(self, group: ProcessGroup) -> ProcessGroup:
        """Create a group."""
        now = utc_now_iso()
        group.created_at = now
        group.updated_at = now
        self.group_repo.create(group)
        logger.info("process_group_created", group_id=group.id, members=len(group.members))
        return group

    def update_group(self, group_id: str, changes: dict[str, Any], members: list[str] | None) -> dict[str, Any]:
        """Update a group's fields; members are replaced only when non-empty.

        Args:
            group_id: Group ID.
            changes: Stored field names and values; ``None`` is ignored.
            members: New member UIDs.

        Returns:
            The expanded group.

        Raises:
            NotFoundError: The group does not exist.
        """
        if not self.group_repo.exists(group_id):
            raise NotFoundError("Grupo no encontrado")

        updates = {key: value for key, value in changes.items() if value is not None}
        if members:
            updates["members"] = members
        self.group_repo.update_fields(group_id, updates)
        if members:
            self.assign_users(group_id, members)

        logger.info("process_group_updated", group_id=group_id, fields=sorted(updates))
        return self.get_expanded(group_id)

    def delete_group(self, group_id: str) -> None:
        """Delete a group.

        Raises:
            NotFoundError: The group does not exist.
        """
        if not self.group_repo.exists(group_id):
            raise NotFoundError("Grupo no encontrado")
        self.group_repo.delete(group_id)
        logger.info("process_group_deleted", group_id=group_id)

    def update_members(self, group_id: str, user_ids: list[str]) -> dict[str, Any]:
        """Replace a group's members and tag each existing user with the group.

        Returns:
            The expanded group plus the UIDs that were skipped.

        Raises:
            NotFoundError: The group does not exist.
        """
        if not self.group_repo.exists(group_id):
            raise NotFoundError("Grupo no encontrado")

        self.group_repo.update_fields(group_id, {"members": user_ids})
        skipped = self.assign_users(group_id, user_ids)
        return {**self.get_expanded(group_id), "skipped": skipped}

    def assign_users(self, group_id: str, user_ids: list[str]) -> list[str]:
        """Set ``groupId`` on every existing user in one batch.

        Args:
            group_id: Group ID.
            user_ids: Candidate UIDs.

        Returns:
            UIDs that were blank or had no profile.
        """
        candidates = [uid for uid in user_ids if uid and uid.strip()]
        existing = {user.id for user in self.user_repo.get_many(candidates)}
        ops = [
            self.user_repo.update_op(uid, {"groupId": group_id})
            for uid in candidates
            if uid in existing
        ]
        self.user_repo.commit(ops)

        skipped = [uid for uid in user_ids if uid not in existing]
        if skipped:
            logger.warning("group_members_skipped", group_id=group_id, skipped=skipped)
        logger.info("group_members_assigned", group_id=group_id, assigned=len(ops))
        return skipped

    def get_group_with_recent_plans(self, group_id: str) -> dict[str, Any]:
        """A group with its active processes updated in the last 30 days.

        Raises:
            NotFoundError: The group does not exist.
        """
        group = self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Grupo no encontrado")

        since = (datetime.now(UTC) - timedelta(days=RECENT_PLANS_DAYS)).isoformat(
            timespec="milliseconds"
        ).replace("+00:00", "Z")
        plans = self.plan_repo.find_by(
            [
                ("groupId", "==", group_id),
                ("estado", "==", True),
                ("updatedAt", ">=", since),
            ]
        )
        return {**group.to_response(), "plans": [plan.to_response() for plan in plans]}

    def delete_plans(self, plan_ids: list[str]) -> int:
        """Delete processes in one batch.

        Returns:
            Number of deleted plans.
        """
        self.plan_repo.commit([self.plan_repo.delete_op(plan_id) for plan_id in plan_ids])
        logger.info("group_plans_deleted", count=len(plan_ids))
        return len(plan_ids)

    def list_all_plans(self) -> list[dict[str, Any]]:
        """Every plan with the name of its group (or None)."""
        names = {group.id: group.name for group in self.group_repo.find_all()}
        return [
            {**plan.to_response(), "groupName": names.get(plan.group_id)}
            for plan in self.plan_repo.find_all()
        ]

    def get_expanded(self, group_id: str) -> dict[str, Any]:
        """A group with members and processes resolved.

        Raises:
            NotFoundError: The group does not exist.
        """
        group = self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Grupo no encontrado")
        return self._expand(group)

    def _expand(self, group: ProcessGroup) -> dict[str, Any]:
        members = self.user_repo.get_many([uid for uid in group.members if uid])
        plans: list[Plan] = self.plan_repo.find_by_group(group.id) if group.id else []
        return {
            **group.to_response(),
            "members": [member_summary(user) for user in members],
            "plans": [plan.to_response() for plan in plans],
        }
