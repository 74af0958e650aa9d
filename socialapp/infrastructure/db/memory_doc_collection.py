"""
In-Memory Document Collection
=============================

Process-local implementation of DocCollection.

Used for development (STORAGE_BACKEND=memory) and tests. Every operation
first yields to the event loop, mimicking a storage round trip, and then
runs to completion without further suspension, so each call is atomic just
like a single MongoDB write.
"""
import asyncio
import copy
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.repositories.doc_collection import (
    DocCollection,
    Document,
    DuplicateDocumentError,
    Filter,
    SortSpec,
)
from socialapp.utils.datetime_utils import now


_MISSING = object()


def _equals(value: Any, expected: Any) -> bool:
    # An array field matches a scalar when it contains it (MongoDB semantics)
    if isinstance(value, list) and not isinstance(expected, list):
        return expected in value
    if value is _MISSING:
        return expected is None
    return value == expected


def matches(doc: Document, filter: Filter) -> bool:
    """Evaluate the supported subset of MongoDB query syntax against a document."""
    for key, condition in filter.items():
        if key == "$or":
            if not any(matches(doc, sub_filter) for sub_filter in condition):
                return False
            continue

        value = doc.get(key, _MISSING)
        if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
            for op, argument in condition.items():
                if op == "$in":
                    ok = any(_equals(value, candidate) for candidate in argument)
                elif op == "$ne":
                    ok = not _equals(value, argument)
                else:
                    raise ValueError(f"Unsupported query operator '{op}'")
                if not ok:
                    return False
        elif not _equals(value, condition):
            return False
    return True


class InMemoryDocCollection(DocCollection):
    """Dict-backed collection keyed by ObjectId."""

    def __init__(self, name: str, unique=()) -> None:
        super().__init__(name, unique)
        self._documents: Dict[ObjectId, Document] = {}

    async def _round_trip(self) -> None:
        await asyncio.sleep(0)

    def _unique_value(self, doc: Document, keys: Tuple[str, ...]) -> Tuple[Any, ...]:
        return tuple(doc.get(key) for key in keys)

    def _check_unique(self, candidate: Document) -> None:
        for keys in self.unique_keys:
            value = self._unique_value(candidate, keys)
            for existing in self._documents.values():
                if existing[DocFields.ID] == candidate[DocFields.ID]:
                    continue
                if self._unique_value(existing, keys) == value:
                    raise DuplicateDocumentError(self.name, keys)

    def _find(self, filter: Filter) -> Optional[Document]:
        for doc in self._documents.values():
            if matches(doc, filter):
                return doc
        return None

    async def create_one(self, fields: Document) -> ObjectId:
        await self._round_trip()
        timestamp = now()
        doc = copy.deepcopy(fields)
        doc[DocFields.ID] = ObjectId()
        doc[DocFields.DATE_CREATED] = timestamp
        doc[DocFields.DATE_UPDATED] = timestamp
        self._check_unique(doc)
        self._documents[doc[DocFields.ID]] = doc
        return doc[DocFields.ID]

    async def read_one(self, filter: Filter) -> Optional[Document]:
        await self._round_trip()
        doc = self._find(filter)
        return copy.deepcopy(doc) if doc is not None else None

    async def read_many(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        await self._round_trip()
        docs = [copy.deepcopy(doc) for doc in self._documents.values() if matches(doc, filter)]
        # Apply the least significant key first; sorted() is stable
        for field, direction in reversed(list(sort or [])):
            docs.sort(key=lambda doc: doc.get(field), reverse=direction < 0)
        return docs

    async def count(self, filter: Filter) -> int:
        await self._round_trip()
        return sum(1 for doc in self._documents.values() if matches(doc, filter))

    async def partial_update_one(self, filter: Filter, patch: Document) -> bool:
        await self._round_trip()
        doc = self._find(filter)
        if doc is None:
            return False
        updated = {**doc, **copy.deepcopy(patch), DocFields.DATE_UPDATED: now()}
        self._check_unique(updated)
        self._documents[doc[DocFields.ID]] = updated
        return True

    async def delete_one(self, filter: Filter) -> bool:
        await self._round_trip()
        doc = self._find(filter)
        if doc is None:
            return False
        del self._documents[doc[DocFields.ID]]
        return True

    async def delete_many(self, filter: Filter) -> int:
        await self._round_trip()
        doomed = [doc_id for doc_id, doc in self._documents.items() if matches(doc, filter)]
        for doc_id in doomed:
            del self._documents[doc_id]
        return len(doomed)

    async def add_to_set_one(self, filter: Filter, field: str, value: Any) -> bool:
        await self._round_trip()
        doc = self._find(filter)
        if doc is None or value in doc.get(field, []):
            return False
        doc[field] = [*doc.get(field, []), value]
        doc[DocFields.DATE_UPDATED] = now()
        return True

    async def pull_one(self, filter: Filter, field: str, value: Any) -> bool:
        await self._round_trip()
        doc = self._find(filter)
        if doc is None or value not in doc.get(field, []):
            return False
        doc[field] = [member for member in doc[field] if member != value]
        doc[DocFields.DATE_UPDATED] = now()
        return True
