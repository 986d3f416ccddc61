"""Category models.

A category groups exercises; the link lives in its own collection so an
exercise can belong to several categories.
"""

from pydantic import Field

from ecobreak.models.base import FirestoreModel
from ecobreak.models.exercise import Exercise

CATEGORY_PAUSED = "paused"


class Category(FirestoreModel):
    """An exercise category.

    Firestore Collection: categories

    ``status`` is a boolean for enabled/disabled and the string ``"paused"``
    once an admin pauses the category.
    """

    nombre: str
    descripcion: str | None = None
    color: str | int | None = None
    status: bool | str = True
    created_by: str | None = None

    created_at: str | None = None
    updated_at: str | None = None


class CategoryExercise(FirestoreModel):
    """Link between a category and an exercise.

    Firestore Collection: categoriesXexercise
    """

    categoria_id: str
    actividad_id: str
    order: int | None = Field(None, ge=0)


class CategoryHistory(FirestoreModel):
    """Marks a process as completed by a user on a given day.

    Firestore Collection: categoryHistory
    """

    user_id: str
    process_id: str
    group_id: str | None = None
    create_at: str = Field(..., description="Day as YYYY-MM-DD")


class CategoryWithExercises(Category):
    """A category together with its linked exercises."""

    ejercicios: list[Exercise] = Field(default_factory=list)
