"""Process group and per-user process assignment models."""

from enum import Enum

from pydantic import Field

from ecobreak.models.base import FirestoreModel


class ProcessGroup(FirestoreModel):
    """A named group of users that processes are scheduled for.

    Firestore Collection: processGroups
    """

    name: str
    description: str | None = None
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    members: list[str] = Field(default_factory=list, description="User IDs")

    created_at: str | None = None
    updated_at: str | None = None


class AssignmentStatus(str, Enum):
    """Status of a process assigned to a user."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"
    INACTIVE = "inactive"


# Assignments that still produce daily activities
OPEN_ASSIGNMENT_STATUSES = (
    AssignmentStatus.PENDING.value,
    AssignmentStatus.SCHEDULED.value,
    AssignmentStatus.ACTIVE.value,
)


class AssignedProcess(FirestoreModel):
    """A process copied into a user's assignments.

    Firestore Collection: users/{uid}/assignedProcesses (document ID is the
    process ID)
    """

    process_id: str
    group_id: str | None = None
    nombre: str | None = None
    categories: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    status: str = AssignmentStatus.PENDING.value
    progress: int = Field(0, ge=0, le=100)

    assigned_at: str | None = None
    updated_at: str | None = None
