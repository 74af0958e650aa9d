"""
Shared fixtures
---------------

Every test runs against the in-memory storage backend with a fresh
container, so no MongoDB server is required.
"""
import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("MINIMUM_ATTENTION", "10")

import pytest
from argon2 import PasswordHasher
from bson import ObjectId
from fastapi.testclient import TestClient

from socialapp.application.enrichment import EnrichmentRegistry
from socialapp.application.synchronizations import Synchronizations
from socialapp.core.config import Settings, reset_settings
from socialapp.di.container import DIContainer, set_container
from socialapp.domain.concepts.authing import AuthingConcept
from socialapp.domain.concepts.communiting import CommunitingConcept
from socialapp.domain.concepts.favoriting import FavoritingConcept
from socialapp.domain.concepts.featuring import FeaturingConcept
from socialapp.domain.concepts.feeding import FeedingConcept
from socialapp.domain.concepts.friending import FriendingConcept
from socialapp.domain.concepts.posting import PostingConcept
from socialapp.domain.concepts.sessioning import SessioningConcept
from socialapp.infrastructure.db.memory_doc_collection import InMemoryDocCollection

# Cheap parameters keep password hashing fast in tests
FAST_HASHER = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def alice() -> ObjectId:
    return ObjectId()


@pytest.fixture
def bob() -> ObjectId:
    return ObjectId()


@pytest.fixture
def communiting() -> CommunitingConcept:
    return CommunitingConcept(InMemoryDocCollection("communities", CommunitingConcept.UNIQUE_KEYS))


@pytest.fixture
def feeding() -> FeedingConcept:
    return FeedingConcept(InMemoryDocCollection("feeds", FeedingConcept.UNIQUE_KEYS))


@pytest.fixture
def favoriting() -> FavoritingConcept:
    return FavoritingConcept(InMemoryDocCollection("favorites", FavoritingConcept.UNIQUE_KEYS))


@pytest.fixture
def featuring() -> FeaturingConcept:
    return FeaturingConcept(
        InMemoryDocCollection("features", FeaturingConcept.UNIQUE_KEYS),
        minimum_attention=10,
    )


@pytest.fixture
def friending() -> FriendingConcept:
    return FriendingConcept(
        InMemoryDocCollection("friends", FriendingConcept.FRIENDSHIP_UNIQUE_KEYS),
        InMemoryDocCollection("friends_requests"),
    )


@pytest.fixture
def posting() -> PostingConcept:
    return PostingConcept(InMemoryDocCollection("posts"))


@pytest.fixture
def sessioning() -> SessioningConcept:
    return SessioningConcept(InMemoryDocCollection("sessions", SessioningConcept.UNIQUE_KEYS))


@pytest.fixture
def authing() -> AuthingConcept:
    return AuthingConcept(InMemoryDocCollection("users", AuthingConcept.UNIQUE_KEYS), hasher=FAST_HASHER)


@pytest.fixture
def container() -> DIContainer:
    """Fresh container on the memory backend; resets the global one afterwards."""
    reset_settings()
    container = DIContainer(Settings())
    # Swap in the fast hasher; concepts are plain singletons
    container.get(AuthingConcept)._hasher = FAST_HASHER
    yield container
    set_container(None)
    reset_settings()


@pytest.fixture
def sync(container: DIContainer) -> Synchronizations:
    return container.get(Synchronizations)


@pytest.fixture
def registry(container: DIContainer) -> EnrichmentRegistry:
    return container.get(EnrichmentRegistry)


@pytest.fixture
def app(container: DIContainer):
    from socialapp.main import create_application
    return create_application(container)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_client(app):
    """Factory for extra clients (one cookie jar per simulated user)."""
    clients = []

    def factory() -> TestClient:
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.__exit__(None, None, None)
