from typing import TYPE_CHECKING

from ...core.config import Settings
from ...infrastructure.db.collection_factory import CollectionFactory

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized storage provider - single source of truth for all collections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the collection factory for the configured backend.
        Every concept gets its collection from this factory, so switching
        STORAGE_BACKEND switches all of them at once.
        """
        settings = container.get(Settings)

        if settings.storage_backend == "mongo":
            from ...infrastructure.db.mongo_connection import get_mongo_client
            container.register_singleton("mongo_client", get_mongo_client())

        container.register_singleton(CollectionFactory, CollectionFactory(settings.storage_backend))
