"""
API v1 Package
===============

Version 1 API: endpoints, route table and error handlers.
"""
from .routes import ROUTE_TABLE, Route, build_router
from .error_handlers import register_error_handlers

__all__ = ["ROUTE_TABLE", "Route", "build_router", "register_error_handlers"]
