"""Firestore database client."""

from dataclasses import dataclass, field
from typing import Any, Literal

from google.auth.credentials import Credentials
from google.cloud import firestore  # type: ignore[attr-defined]
from google.cloud.firestore_v1.base_query import FieldFilter

# Firestore limits
IN_QUERY_LIMIT = 30
BATCH_LIMIT = 500


@dataclass(frozen=True)
class WriteOp:
    """A single write inside a batched commit."""

    kind: Literal["set", "update", "delete"]
    collection: str
    doc_id: str
    data: dict[str, Any] = field(default_factory=dict)
    merge: bool = False


class FirestoreClient:
    """Client for Firestore CRUD operations.

    Automatically connects to emulator when FIRESTORE_EMULATOR_HOST is set.
    Collection names may be sub-collection paths such as
    ``users/{uid}/assignedProcesses``. Every document returned carries its
    Firestore ID under ``id``.
    """

    def __init__(self, project_id: str, credentials: Credentials | None = None) -> None:
        """Initialize Firestore client.

        Args:
            project_id: GCP project ID.
            credentials: Optional service account credentials.
        """
        self._db = firestore.Client(project=project_id, credentials=credentials)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Get a document by ID.

        Args:
            collection: Collection name.
            doc_id: Document ID.

        Returns:
            Document data or None if not found.
        """
        doc = self._db.collection(collection).document(doc_id).get()
        if doc.exists:
            return self._with_id(doc)
        return None

    def get_many(self, collection: str, doc_ids: list[str]) -> list[dict[str, Any]]:
        """Get several documents by ID, preserving the requested order.

        Args:
            collection: Collection name.
            doc_ids: Document IDs.

        Returns:
            Existing documents only.
        """
        if not doc_ids:
            return []
        refs = [self._db.collection(collection).document(doc_id) for doc_id in doc_ids]
        found = {
            doc.id: self._with_id(doc) for doc in self._db.get_all(refs) if doc.exists
        }
        return [found[doc_id] for doc_id in doc_ids if doc_id in found]

    def new_id(self, collection: str) -> str:
        """Reserve an auto-generated document ID.

        Args:
            collection: Collection name.

        Returns:
            A fresh document ID.
        """
        return str(self._db.collection(collection).document().id)

    def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with an auto-generated ID.

        Args:
            collection: Collection name.
            data: Document data.

        Returns:
            The new document ID.
        """
        ref = self._db.collection(collection).document()
        ref.set(data)
        return str(ref.id)

    def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        merge: bool = False,
    ) -> None:
        """Create or replace a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Document data.
            merge: Merge into an existing document instead of replacing it.
        """
        self._db.collection(collection).document(doc_id).set(data, merge=merge)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Update specific fields in a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Fields to update.
        """
        self._db.collection(collection).document(doc_id).update(data)

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
        """
        self._db.collection(collection).document(doc_id).delete()

    def query(
        self,
        collection: str,
        filters: list[tuple[str, str, Any]],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query documents with filters.

        Args:
            collection: Collection name.
            filters: List of (field, operator, value) tuples.
            order_by: Optional field to sort by.
            descending: Sort direction when order_by is set.
            limit: Optional maximum number of documents.

        Returns:
            List of matching documents.
        """
        query = self._db.collection(collection)
        for field_path, op, value in filters:
            query = query.where(filter=FieldFilter(field_path, op, value))
        if order_by is not None:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        return [self._with_id(doc) for doc in query.stream()]

    def query_in(
        self,
        collection: str,
        field_path: str,
        values: list[Any],
        filters: list[tuple[str, str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Query documents whose field is one of many values.

        Firestore caps ``in`` filters at 30 values, so the values are split
        into chunks and the results concatenated.

        Args:
            collection: Collection name.
            field_path: Field compared against the values.
            values: Candidate values. An empty list matches nothing.
            filters: Extra (field, operator, value) filters.

        Returns:
            List of matching documents.
        """
        results: list[dict[str, Any]] = []
        for start in range(0, len(values), IN_QUERY_LIMIT):
            chunk = values[start : start + IN_QUERY_LIMIT]
            results.extend(
                self.query(collection, [*(filters or []), (field_path, "in", chunk)])
            )
        return results

    def commit(self, operations: list[WriteOp]) -> None:
        """Apply writes in batches.

        Each chunk of up to 500 operations is atomic; there is no rollback
        across chunks.

        Args:
            operations: Writes to apply, in order.
        """
        for start in range(0, len(operations), BATCH_LIMIT):
            batch = self._db.batch()
            for op in operations[start : start + BATCH_LIMIT]:
                ref = self._db.collection(op.collection).document(op.doc_id)
                if op.kind == "set":
                    batch.set(ref, op.data, merge=op.merge)
                elif op.kind == "update":
                    batch.update(ref, op.data)
                else:
                    batch.delete(ref)
            batch.commit()

    @staticmethod
    def _with_id(doc: Any) -> dict[str, Any]:
        data: dict[str, Any] = doc.to_dict() or {}
        data["id"] = doc.id
        return data
