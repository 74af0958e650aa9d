"""
FastAPI Application
===================

Main FastAPI app setup: concepts, enrichment registry, route table and
error handlers are wired here once, at startup.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from socialapp.api.v1 import ROUTE_TABLE, build_router, register_error_handlers
from socialapp.api.v1.endpoints import health
from socialapp.application.enrichment import EnrichmentRegistry
from socialapp.core.config import Settings
from socialapp.di.container import DIContainer, get_container, set_container
from socialapp.infrastructure.db.collection_factory import CollectionFactory

logger = logging.getLogger(__name__)


def create_application(container: Optional[DIContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Logging configuration
    - CORS middleware configuration
    - API routes built from the route table
    - The concept error handler backed by the enrichment registry
    - Startup/shutdown handlers for storage

    Args:
        container: DI container to use; the global one if omitted

    Returns:
        Configured FastAPI application instance
    """
    if container is None:
        container = get_container()
    else:
        set_container(container)

    settings = container.get(Settings)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    application = FastAPI(
        title="Social Concepts API",
        description="Social app backend composed from independent concepts",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(build_router(ROUTE_TABLE), prefix="/api")
    application.add_api_route("/health", health, methods=["GET"], tags=["health"])
    register_error_handlers(application, container.get(EnrichmentRegistry))

    @application.on_event("startup")
    async def startup_event():
        """Create unique indexes before serving requests."""
        await container.get(CollectionFactory).initialize()
        logger.info("Storage ready (%s backend)", settings.storage_backend)

    @application.on_event("shutdown")
    async def shutdown_event():
        """Close the MongoDB connection, if one was opened."""
        if "mongo_client" in container.instances:
            await container.get("mongo_client").close()
        logger.info("All services stopped")

    return application


# Create application instance
app = create_application()
