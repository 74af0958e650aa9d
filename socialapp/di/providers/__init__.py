"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .database_provider import DatabaseProvider
from .concept_provider import ConceptProvider
from .application_provider import ApplicationProvider

__all__ = [
    "DatabaseProvider",
    "ConceptProvider",
    "ApplicationProvider",
]
