"""
MongoDB Document Collection
===========================

Concrete implementation of DocCollection using MongoDB.
"""
import logging
from typing import Any, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.repositories.doc_collection import (
    DocCollection,
    Document,
    DuplicateDocumentError,
    Filter,
    SortSpec,
)
from socialapp.infrastructure.db.mongo_connection import get_mongo_client
from socialapp.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class MongoDocCollection(DocCollection):
    """
    MongoDB implementation of DocCollection.

    Array toggles are single guarded ``update_one`` calls, so the membership
    check and the write happen atomically on the server.
    """

    def __init__(self, name: str, unique=()) -> None:
        super().__init__(name, unique)
        self._client = get_mongo_client()
        self._collection = self._client.get_collection(name)

    def _duplicate(self, error: DuplicateKeyError) -> DuplicateDocumentError:
        key_pattern = (error.details or {}).get("keyPattern") or {}
        return DuplicateDocumentError(self.name, list(key_pattern))

    async def initialize(self) -> None:
        """Create one unique index per unique key group."""
        for keys in self.unique_keys:
            index_name = await self._collection.create_index(
                [(key, ASCENDING) for key in keys],
                unique=True,
            )
            logger.info("Ensured unique index %s on '%s'", index_name, self.name)

    async def create_one(self, fields: Document) -> ObjectId:
        timestamp = now()
        doc = {**fields, DocFields.DATE_CREATED: timestamp, DocFields.DATE_UPDATED: timestamp}
        try:
            result = await self._collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise self._duplicate(e) from e
        return result.inserted_id

    async def read_one(self, filter: Filter) -> Optional[Document]:
        return await self._collection.find_one(filter)

    async def read_many(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        cursor = self._collection.find(filter)
        if sort:
            cursor = cursor.sort(list(sort))
        return await cursor.to_list(None)

    async def count(self, filter: Filter) -> int:
        return await self._collection.count_documents(filter)

    async def partial_update_one(self, filter: Filter, patch: Document) -> bool:
        try:
            result = await self._collection.update_one(
                filter,
                {"$set": {**patch, DocFields.DATE_UPDATED: now()}},
            )
        except DuplicateKeyError as e:
            raise self._duplicate(e) from e
        return result.matched_count > 0

    async def delete_one(self, filter: Filter) -> bool:
        result = await self._collection.delete_one(filter)
        return result.deleted_count > 0

    async def delete_many(self, filter: Filter) -> int:
        result = await self._collection.delete_many(filter)
        return result.deleted_count

    async def add_to_set_one(self, filter: Filter, field: str, value: Any) -> bool:
        # The $ne guard makes the update match only while the value is absent
        result = await self._collection.update_one(
            {"$and": [filter, {field: {"$ne": value}}]},
            {"$push": {field: value}, "$set": {DocFields.DATE_UPDATED: now()}},
        )
        return result.modified_count > 0

    async def pull_one(self, filter: Filter, field: str, value: Any) -> bool:
        result = await self._collection.update_one(
            {"$and": [filter, {field: value}]},
            {"$pull": {field: value}, "$set": {DocFields.DATE_UPDATED: now()}},
        )
        return result.modified_count > 0
