"""
Collection Factory
==================

Creates DocCollection instances for the configured storage backend and
remembers them so indexes can be prepared once at startup.
"""
import logging
from typing import List, Sequence

from socialapp.domain.repositories.doc_collection import DocCollection
from socialapp.infrastructure.db.memory_doc_collection import InMemoryDocCollection

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("mongo", "memory")


class CollectionFactory:
    """Backend-aware DocCollection factory."""

    def __init__(self, backend: str) -> None:
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{backend}', expected one of {SUPPORTED_BACKENDS}"
            )
        self.backend = backend
        self._collections: List[DocCollection] = []

    def create(self, name: str, unique: Sequence[Sequence[str]] = ()) -> DocCollection:
        """
        Create a collection.

        Args:
            name: Collection name
            unique: Field groups whose combined values must be unique

        Returns:
            New DocCollection bound to the configured backend
        """
        if self.backend == "mongo":
            # Imported lazily so the memory backend never touches pymongo's client
            from socialapp.infrastructure.db.mongo_doc_collection import MongoDocCollection
            collection: DocCollection = MongoDocCollection(name, unique)
        else:
            collection = InMemoryDocCollection(name, unique)

        self._collections.append(collection)
        logger.debug("Created %s collection '%s'", self.backend, name)
        return collection

    @property
    def collections(self) -> List[DocCollection]:
        return list(self._collections)

    async def initialize(self) -> None:
        """Prepare every collection created so far."""
        for collection in self._collections:
            await collection.initialize()
        logger.info("Initialized %d %s collections", len(self._collections), self.backend)
