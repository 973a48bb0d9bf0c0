"""
In-memory stand-in for the firebase-admin Firestore client.

Implements the small slice of the client API the repository touches:
collection(), document(), set(merge=...), delete(), order_by() and stream().
Every write is recorded so tests can assert on the exact payloads sent.
"""

import copy
import threading
from typing import Any, Dict, List, Optional, Tuple


def _deep_merge(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


def _get_path(data: Dict[str, Any], path: str) -> Any:
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocumentReference:
    def __init__(self, collection: "FakeCollection", doc_id: str):
        self._collection = collection
        self.id = doc_id

    def get(self) -> FakeSnapshot:
        self._collection._maybe_fail()
        return FakeSnapshot(self.id, self._collection.documents.get(self.id))

    def set(self, data: Dict[str, Any], merge: bool = False) -> None:
        self._collection._maybe_fail()
        with self._collection.lock:
            self._collection.writes.append((self.id, copy.deepcopy(data), merge))
            existing = self._collection.documents.get(self.id)
            if merge and existing is not None:
                _deep_merge(existing, data)
            else:
                self._collection.documents[self.id] = copy.deepcopy(data)

    def delete(self) -> None:
        self._collection._maybe_fail()
        with self._collection.lock:
            self._collection.deletes.append(self.id)
            self._collection.documents.pop(self.id, None)


class FakeQuery:
    def __init__(self, collection: "FakeCollection", field: str, direction: str):
        self._collection = collection
        self.field = field
        self.direction = direction

    def stream(self):
        self._collection._maybe_fail()
        with self._collection.lock:
            items = list(self._collection.documents.items())
        # Firestore leaves out documents missing the order-by field
        items = [(k, v) for k, v in items if _get_path(v, self.field) is not None]
        items.sort(
            key=lambda item: _get_path(item[1], self.field),
            reverse=self.direction == "DESCENDING",
        )
        for doc_id, data in items:
            yield FakeSnapshot(doc_id, data)


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.writes: List[Tuple[str, Dict[str, Any], bool]] = []
        self.deletes: List[str] = []
        self.queries: List[FakeQuery] = []
        self.fail_with: Optional[BaseException] = None
        self.lock = threading.Lock()

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def document(self, doc_id: str) -> FakeDocumentReference:
        return FakeDocumentReference(self, doc_id)

    def order_by(self, field: str, direction: str = "ASCENDING") -> FakeQuery:
        query = FakeQuery(self, field, direction)
        self.queries.append(query)
        return query


class FakeFirestoreClient:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]
