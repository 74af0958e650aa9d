"""
Document Collection Interface
=============================

Abstract persistence contract every concept depends on.
Implementations live in the infrastructure layer.

Each concept owns exactly one collection. Documents are plain dicts with an
``_id`` plus ``date_created``/``date_updated`` timestamps maintained by the
collection, never by the concept.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

Filter = Dict[str, Any]
Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


class DuplicateDocumentError(Exception):
    """Raised when a write would violate a unique key of the collection."""

    def __init__(self, collection: str, keys: Sequence[str]) -> None:
        self.collection = collection
        self.keys = tuple(keys)
        super().__init__(f"Duplicate value for unique key {self.keys} in '{collection}'")


class DocCollection(ABC):
    """
    Abstract async collection of documents.

    ``read_one``/``read_many``/``count`` never raise for missing data; they
    return ``None``, an empty list or zero. ``create_one`` raises
    ``DuplicateDocumentError`` when a unique key is violated.

    ``partial_update_one`` is not atomic with respect to a read the caller
    made earlier. Callers that toggle membership in an array use
    ``add_to_set_one``/``pull_one``, which check and write in one step.
    """

    def __init__(self, name: str, unique: Sequence[Sequence[str]] = ()) -> None:
        """
        Args:
            name: Collection name
            unique: Field groups whose combined values must be unique
        """
        self.name = name
        self.unique_keys: List[Tuple[str, ...]] = [tuple(keys) for keys in unique]

    async def initialize(self) -> None:
        """Prepare backing storage (indexes). Default: nothing to do."""

    @abstractmethod
    async def create_one(self, fields: Document) -> ObjectId:
        """
        Insert a new document.

        Returns:
            The new document's id
        """
        pass

    @abstractmethod
    async def read_one(self, filter: Filter) -> Optional[Document]:
        """Return the first matching document or None."""
        pass

    @abstractmethod
    async def read_many(self, filter: Filter, sort: Optional[SortSpec] = None) -> List[Document]:
        """Return all matching documents, optionally sorted."""
        pass

    @abstractmethod
    async def count(self, filter: Filter) -> int:
        """Count matching documents."""
        pass

    @abstractmethod
    async def partial_update_one(self, filter: Filter, patch: Document) -> bool:
        """
        Replace only the given fields of the first matching document.

        Returns:
            True if a document matched
        """
        pass

    @abstractmethod
    async def delete_one(self, filter: Filter) -> bool:
        """
        Delete the first matching document.

        Returns:
            True if a document was deleted
        """
        pass

    @abstractmethod
    async def delete_many(self, filter: Filter) -> int:
        """Delete all matching documents and return how many were removed."""
        pass

    @abstractmethod
    async def add_to_set_one(self, filter: Filter, field: str, value: Any) -> bool:
        """
        Atomically append ``value`` to the array ``field`` unless present.

        Returns:
            True only if this call inserted the value
        """
        pass

    @abstractmethod
    async def pull_one(self, filter: Filter, field: str, value: Any) -> bool:
        """
        Atomically remove ``value`` from the array ``field`` if present.

        Returns:
            True only if this call removed the value
        """
        pass
