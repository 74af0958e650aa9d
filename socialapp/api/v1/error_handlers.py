"""
Error Handlers
==============

The single place where concept errors are caught.

A ConceptError is turned into ``{"kind": ..., "message": ...}``: the message
comes from the enrichment registry, the HTTP status from the error's root
category. Errors outside the taxonomy are left to FastAPI.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from socialapp.application.enrichment import EnrichmentRegistry
from socialapp.domain.errors import ConceptError, ErrorCategory

logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY = {
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
}


def register_error_handlers(application: FastAPI, registry: EnrichmentRegistry) -> None:
    """Install the ConceptError handler on ``application``."""

    async def handle_concept_error(request: Request, exc: ConceptError) -> JSONResponse:
        message = await registry.describe(exc)
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, message)
        return JSONResponse(
            status_code=STATUS_BY_CATEGORY[exc.category],
            content={"kind": exc.category.value, "message": message},
        )

    application.add_exception_handler(ConceptError, handle_concept_error)
