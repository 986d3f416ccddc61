"""Repositories for categories, their exercise links and completion history."""

from ecobreak.models.category import Category, CategoryExercise, CategoryHistory
from ecobreak.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Category repository.

    Firestore Collection: categories
    """

    collection_name = "categories"
    model_class = Category

    def find_all_newest_first(self) -> list[Category]:
        """All categories ordered by creation time, newest first."""
        return self.find_all(order_by="createdAt", descending=True)

    def missing_ids(self, category_ids: list[str]) -> list[str]:
        """IDs with no stored category, in request order."""
        found = {category.id for category in self.get_many(category_ids)}
        return [category_id for category_id in category_ids if category_id not in found]


class CategoryExerciseRepository(BaseRepository[CategoryExercise]):
    """Category-exercise link repository.

    Firestore Collection: categoriesXexercise
    """

    collection_name = "categoriesXexercise"
    model_class = CategoryExercise

    def find_by_category(self, category_id: str) -> list[CategoryExercise]:
        """Links of one category."""
        return self.find_by([("categoriaId", "==", category_id)])

    def find_by_categories(self, category_ids: list[str]) -> list[CategoryExercise]:
        """Links of several categories."""
        return self.find_in("categoriaId", category_ids)


class CategoryHistoryRepository(BaseRepository[CategoryHistory]):
    """Category history repository.

    Firestore Collection: categoryHistory
    """

    collection_name = "categoryHistory"
    model_class = CategoryHistory

    def find_for_day(
        self,
        user_id: str,
        day: str,
        group_id: str | None = None,
        process_id: str | None = None,
    ) -> list[CategoryHistory]:
        """History records of a user for one day.

        Args:
            user_id: User ID.
            day: Day as YYYY-MM-DD.
            group_id: Optional group filter.
            process_id: Optional process filter.

        Returns:
            Matching records.
        """
        filters: list[tuple[str, str, object]] = [
            ("userId", "==", user_id),
            ("createAt", "==", day),
        ]
        if group_id is not None:
            filters.append(("groupId", "==", group_id))
        if process_id is not None:
            filters.append(("processId", "==", process_id))
        return self.find_by(filters)
