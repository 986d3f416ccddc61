"""Plan model.

The plans collection stores two kinds of documents: activity plans authored
by admins (name, activities, status) and group processes created by an
upload (groupId, nombre, categories, estado). Processes are the documents
that carry a ``groupId``.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ecobreak.models.base import FirestoreModel

PLAN_AVAILABLE = "available"
PLAN_PAUSED = "paused"


class PlanActivity(BaseModel):
    """Reference to an activity inside a plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    activity_id: str
    order: int = Field(0, ge=0)


class Plan(FirestoreModel):
    """A plan or a group process.

    Firestore Collection: plans
    """

    # Activity plan
    name: str | None = None
    description: str | None = None
    activities: list[PlanActivity] = Field(default_factory=list)
    status: str | None = None

    # Group process
    group_id: str | None = None
    nombre: str | None = None
    categories: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    estado: bool = False
    fecha_fin: str | None = Field(None, description="Last day of the active schedule")

    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_process(self) -> bool:
        """Whether this document is a group process."""
        return self.group_id is not None

    @property
    def display_name(self) -> str | None:
        """Name shown to users, whichever kind of plan this is."""
        return self.nombre or self.name
