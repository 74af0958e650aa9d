"""
Dependency Getters
==================

FastAPI ``Depends`` getters backed by the DI container.
"""
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, Request, status

from socialapp.application.enrichment import EnrichmentRegistry
from socialapp.application.synchronizations import Synchronizations
from socialapp.core.config import Settings
from socialapp.di.container import get_container


def get_synchronizations() -> Synchronizations:
    """
    Get the synchronizations service (singleton).

    Returns:
        Synchronizations instance
    """
    return get_container().get(Synchronizations)


def get_enrichment_registry() -> EnrichmentRegistry:
    """
    Get the error enrichment registry (singleton).

    Returns:
        EnrichmentRegistry instance
    """
    return get_container().get(EnrichmentRegistry)


def get_app_settings() -> Settings:
    return get_container().get(Settings)


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the session cookie, if the client sent one."""
    return request.cookies.get(get_app_settings().session_cookie_name)


def parse_object_id(value: str, name: str = "id") -> ObjectId:
    """
    Convert a path/body string into an ObjectId.

    Raises:
        HTTPException: 400 if ``value`` is not a valid ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{value}' is not a valid {name}",
        )
