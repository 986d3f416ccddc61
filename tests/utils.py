"""Test utilities shared across test modules."""

import copy
import itertools
import os
import socket
from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient
from google.api_core.exceptions import NotFound

ClientFactory = Callable[..., TestClient]


def is_emulator_available() -> bool:
    """Check whether the Firestore emulator is reachable.

    Reads the host and port from FIRESTORE_EMULATOR_HOST and tries to
    connect.

    Returns:
        True if the emulator accepts connections.
    """
    host = os.environ.get("FIRESTORE_EMULATOR_HOST", "localhost:8086")
    host_parts = host.split(":")
    hostname = host_parts[0]
    port = int(host_parts[1]) if len(host_parts) > 1 else 8086

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(1)
            result = sock.connect_ex((hostname, port))
            return result == 0
    except OSError:
        return False


class InMemoryFirestore:
    """Dict-backed stand-in for FirestoreClient used by unit tests.

    Mirrors the query semantics the repositories rely on: documents missing
    a filtered or ordered field never match, and ``update`` on a missing
    document fails.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._counter = itertools.count(1)

    def seed(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self.collections.setdefault(collection, {})[doc_id] = dict(data)

    def docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.get(collection, {})

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        data = self.docs(collection).get(doc_id)
        if data is None:
            return None
        return {**copy.deepcopy(data), "id": doc_id}

    def get_many(self, collection: str, doc_ids: list[str]) -> list[dict[str, Any]]:
        found = (self.get(collection, doc_id) for doc_id in doc_ids)
        return [doc for doc in found if doc is not None]

    def new_id(self, collection: str) -> str:
        return f"{collection.rsplit('/', 1)[-1]}_{next(self._counter):04d}"

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = self.new_id(collection)
        self.set(collection, doc_id, data)
        return doc_id

    def set(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        store = self.collections.setdefault(collection, {})
        if merge and doc_id in store:
            store[doc_id].update(copy.deepcopy(data))
        else:
            store[doc_id] = copy.deepcopy(data)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        store = self.docs(collection)
        if doc_id not in store:
            raise NotFound(f"No document to update: {collection}/{doc_id}")
        store[doc_id].update(copy.deepcopy(data))

    def delete(self, collection: str, doc_id: str) -> None:
        self.docs(collection).pop(doc_id, None)

    def query(
        self,
        collection: str,
        filters: list[tuple[str, str, Any]],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        results = [
            {**copy.deepcopy(data), "id": doc_id}
            for doc_id, data in self.docs(collection).items()
            if all(_matches(data, *condition) for condition in filters)
        ]
        if order_by is not None:
            results = [doc for doc in results if order_by in doc]
            results.sort(key=lambda doc: doc[order_by], reverse=descending)
        if limit is not None:
            results = results[:limit]
        return results

    def query_in(
        self,
        collection: str,
        field_path: str,
        values: list[Any],
        filters: list[tuple[str, str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        if not values:
            return []
        return self.query(collection, [*(filters or []), (field_path, "in", values)])

    def commit(self, operations: list[Any]) -> None:
        for op in operations:
            if op.kind == "set":
                self.set(op.collection, op.doc_id, op.data, merge=op.merge)
            elif op.kind == "update":
                self.update(op.collection, op.doc_id, op.data)
            else:
                self.delete(op.collection, op.doc_id)


def _matches(data: dict[str, Any], field_path: str, op: str, value: Any) -> bool:
    if field_path not in data:
        return False
    current = data[field_path]
    if op == "==":
        return bool(current == value)
    if op == "!=":
        return bool(current != value)
    if op == "in":
        return current in value
    if op == "array_contains":
        return isinstance(current, list) and value in current
    if current is None or value is None:
        return False
    if op == "<":
        return bool(current < value)
    if op == "<=":
        return bool(current <= value)
    if op == ">":
        return bool(current > value)
    if op == ">=":
        return bool(current >= value)
    raise ValueError(f"Unsupported operator: {op}")
