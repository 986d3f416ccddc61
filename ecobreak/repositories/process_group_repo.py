"""Repositories for process groups and user process assignments."""

from ecobreak.adapters.firestore_client import FirestoreClient
from ecobreak.models.process_group import AssignedProcess, ProcessGroup
from ecobreak.repositories.base import BaseRepository


class ProcessGroupRepository(BaseRepository[ProcessGroup]):
    """Process group repository.

    Firestore Collection: processGroups
    """

    collection_name = "processGroups"
    model_class = ProcessGroup


class AssignedProcessRepository(BaseRepository[AssignedProcess]):
    """Processes assigned to one user.

    Firestore Collection: users/{uid}/assignedProcesses
    """

    collection_name = "assignedProcesses"
    model_class = AssignedProcess

    def __init__(self, firestore_client: FirestoreClient, user_id: str) -> None:
        """Initialize AssignedProcessRepository.

        Args:
            firestore_client: Firestore client instance.
            user_id: Owner of the assignments.
        """
        super().__init__(firestore_client)
        self.user_id = user_id

    @property
    def collection(self) -> str:
        """Sub-collection path of the user."""
        return f"users/{self.user_id}/{self.collection_name}"

    def find_newest_first(self) -> list[AssignedProcess]:
        """Assignments ordered by assignment time, newest first."""
        return self.find_all(order_by="assignedAt", descending=True)

    def find_by_statuses(self, statuses: list[str]) -> list[AssignedProcess]:
        """Assignments in any of the given statuses."""
        return self.find_in("status", statuses)
