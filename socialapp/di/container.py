from typing import Optional

# Local application imports
from ..core.config import Settings, get_settings
from .base_container import BaseContainer
from .providers import (
    ApplicationProvider,
    ConceptProvider,
    DatabaseProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Storage (DatabaseProvider)
    2. Concepts (ConceptProvider) - each owns one collection from storage
    3. Application (ApplicationProvider) - registry, responses, synchronizations
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.register_singleton(Settings, settings or get_settings())
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: storage → concepts → application
        """
        DatabaseProvider.register(self)
        ConceptProvider.register(self)
        ApplicationProvider.register(self)


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace the global container (None resets it)."""
    global _container
    _container = container
