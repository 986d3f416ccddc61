"""Base repository for Firestore data access.

Every repository inherits from this class.
"""

from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from ecobreak.adapters.firestore_client import FirestoreClient, WriteOp
from ecobreak.models.base import FirestoreModel, utc_now_iso

T = TypeVar("T", bound=FirestoreModel)


class BaseRepository(Generic[T]):
    """Firestore repository base class.

    Domain repositories subclass it and define ``collection_name`` and
    ``model_class``.

    Example:
        class MotivoRepository(BaseRepository[Motivo]):
            collection_name = "motivos"
            model_class = Motivo
    """

    collection_name: ClassVar[str]
    model_class: ClassVar[type[FirestoreModel]]

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize repository with Firestore client.

        Args:
            firestore_client: Firestore client instance.
        """
        self._db = firestore_client

    @property
    def collection(self) -> str:
        """Collection path this repository reads and writes."""
        return self.collection_name

    def get_by_id(self, doc_id: str) -> T | None:
        """Get a document by ID.

        Args:
            doc_id: Document ID.

        Returns:
            Model instance or None.
        """
        data = self._db.get(self.collection, doc_id)
        if data is None:
            return None
        return self._to_model(data)

    def get_many(self, doc_ids: list[str]) -> list[T]:
        """Get documents by ID in the requested order, skipping missing ones.

        Args:
            doc_ids: Document IDs.

        Returns:
            Existing model instances.
        """
        return [self._to_model(data) for data in self._db.get_many(self.collection, doc_ids)]

    def create(self, model: T) -> str:
        """Create a document.

        Uses ``model.id`` when set, otherwise Firestore generates one.

        Args:
            model: Model instance to store.

        Returns:
            The document ID.
        """
        data = self._model_to_dict(model)
        if model.id:
            self._db.set(self.collection, model.id, data)
            return model.id
        doc_id = self._db.add(self.collection, data)
        model.id = doc_id
        return doc_id

    def update(self, model: T) -> None:
        """Write every set field of a model, merging into the stored document.

        Args:
            model: Model instance with ``id`` set.
        """
        if model.id is None:
            raise ValueError("Cannot update a model without an id")
        self._db.set(self.collection, model.id, self._model_to_dict(model), merge=True)

    def update_fields(self, doc_id: str, fields: dict[str, Any]) -> None:
        """Update specific stored fields and refresh ``updatedAt``.

        Args:
            doc_id: Document ID.
            fields: Stored field names and values.
        """
        self._db.update(
            self.collection,
            doc_id,
            {**self._serialize_for_firestore(fields), "updatedAt": utc_now_iso()},
        )

    def delete(self, doc_id: str) -> None:
        """Delete a document.

        Args:
            doc_id: Document ID.
        """
        self._db.delete(self.collection, doc_id)

    def find_by(
        self,
        filters: list[tuple[str, str, Any]],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[T]:
        """Query documents.

        Args:
            filters: (field, operator, value) tuples using stored field names.
            order_by: Optional sort field.
            descending: Sort direction.
            limit: Optional maximum number of results.

        Returns:
            Matching model instances.
        """
        results = self._db.query(
            self.collection, filters, order_by=order_by, descending=descending, limit=limit
        )
        return [self._to_model(data) for data in results]

    def find_in(
        self,
        field_path: str,
        values: list[Any],
        filters: list[tuple[str, str, Any]] | None = None,
    ) -> list[T]:
        """Query documents whose field matches any of the values.

        Args:
            field_path: Stored field name.
            values: Candidate values.
            filters: Extra filters.

        Returns:
            Matching model instances.
        """
        if not values:
            return []
        results = self._db.query_in(self.collection, field_path, values, filters)
        return [self._to_model(data) for data in results]

    def find_all(self, order_by: str | None = None, descending: bool = False) -> list[T]:
        """Get every document.

        Returns:
            All model instances.
        """
        return self.find_by([], order_by=order_by, descending=descending)

    def exists(self, doc_id: str) -> bool:
        """Check whether a document exists.

        Args:
            doc_id: Document ID.

        Returns:
            True if it exists.
        """
        return self._db.get(self.collection, doc_id) is not None

    def count(self, filters: list[tuple[str, str, Any]] | None = None) -> int:
        """Count documents.

        Args:
            filters: Optional filters.

        Returns:
            Number of matching documents.
        """
        return len(self._db.query(self.collection, filters or []))

    # -------------------------------------------------------------------------
    # Batched writes
    # -------------------------------------------------------------------------

    def new_id(self) -> str:
        """Reserve a document ID for a batched create."""
        return self._db.new_id(self.collection)

    def set_op(self, model: T, merge: bool = False) -> WriteOp:
        """Build a batched set for a model with ``id`` set."""
        if model.id is None:
            raise ValueError("Batched writes need a document id")
        return WriteOp("set", self.collection, model.id, self._model_to_dict(model), merge)

    def update_op(self, doc_id: str, fields: dict[str, Any]) -> WriteOp:
        """Build a batched field update that also refreshes ``updatedAt``."""
        data = {**self._serialize_for_firestore(fields), "updatedAt": utc_now_iso()}
        return WriteOp("update", self.collection, doc_id, data)

    def delete_op(self, doc_id: str) -> WriteOp:
        """Build a batched delete."""
        return WriteOp("delete", self.collection, doc_id)

    def commit(self, operations: list[WriteOp]) -> None:
        """Apply batched writes (which may span collections)."""
        if operations:
            self._db.commit(operations)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, data: dict[str, Any]) -> T:
        return self.model_class.model_validate(data)  # type: ignore[return-value]

    def _model_to_dict(self, model: T) -> dict[str, Any]:
        """Convert a model into the stored document body.

        Args:
            model: Model to convert.

        Returns:
            Dict keyed by stored field names, without ``id`` or unset values.
        """
        data = model.model_dump(mode="python", by_alias=True, exclude={"id"}, exclude_none=True)
        return self._serialize_for_firestore(data)  # type: ignore[no-any-return]

    def _serialize_for_firestore(self, data: Any) -> Any:
        """Convert values Firestore cannot store directly.

        Args:
            data: Value to convert.

        Returns:
            Firestore-compatible value.
        """
        if isinstance(data, Enum):
            return data.value
        elif isinstance(data, FirestoreModel):
            return self._serialize_for_firestore(
                data.model_dump(mode="python", by_alias=True, exclude={"id"}, exclude_none=True)
            )
        elif isinstance(data, dict):
            return {k: self._serialize_for_firestore(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._serialize_for_firestore(item) for item in data]
        return data
