"""
Error Enrichment Registry
-------------------------

Maps an error ``kind`` to an async resolver that turns the raw ids carried
by a ConceptError into a human-readable message.

Concepts never look at each other; resolvers are the one place allowed to
read from several concepts (e.g. user id -> username) when building a
message. Dispatch is a table lookup on ``error.kind``.

The registry is filled once during container setup. Registering a second
resolver for the same kind replaces the first.
"""
import logging
from typing import Awaitable, Callable, Dict, Optional

from socialapp.domain.errors import ConceptError

logger = logging.getLogger(__name__)

Resolver = Callable[[ConceptError], Awaitable[str]]


class EnrichmentRegistry:

    def __init__(self) -> None:
        self._resolvers: Dict[str, Resolver] = {}

    def register(self, kind: str, resolver: Resolver) -> None:
        if kind in self._resolvers:
            logger.warning("Resolver for error kind '%s' replaced", kind)
        self._resolvers[kind] = resolver

    def resolves(self, kind: str) -> Callable[[Resolver], Resolver]:
        """
        Decorator form of ``register``.
        """
        def decorator(resolver: Resolver) -> Resolver:
            self.register(kind, resolver)
            return resolver
        return decorator

    def resolver_for(self, kind: str) -> Optional[Resolver]:
        return self._resolvers.get(kind)

    def __contains__(self, kind: str) -> bool:
        return kind in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)

    async def describe(self, error: ConceptError) -> str:
        """
        Client-facing message for ``error``.

        Falls back to the raw template filled with the raw ids when no
        resolver is registered for the error's kind.
        """
        resolver = self._resolvers.get(error.kind)
        if resolver is None:
            return error.message
        return await resolver(error)
