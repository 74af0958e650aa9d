from typing import TYPE_CHECKING

from ...core.config import Settings
from ...domain.concepts.authing import AuthingConcept
from ...domain.concepts.communiting import CommunitingConcept
from ...domain.concepts.favoriting import FavoritingConcept
from ...domain.concepts.featuring import FeaturingConcept
from ...domain.concepts.feeding import FeedingConcept
from ...domain.concepts.friending import FriendingConcept
from ...domain.concepts.posting import PostingConcept
from ...domain.concepts.sessioning import SessioningConcept
from ...infrastructure.db.collection_factory import CollectionFactory

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ConceptProvider:
    """Concept provider - one instance per concept, each with its own collection"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register every concept as a singleton.
        Collection names come from settings; unique keys come from the concept.
        """
        settings = container.get(Settings)
        factory = container.get(CollectionFactory)

        container.register_singleton(
            SessioningConcept,
            SessioningConcept(factory.create(settings.sessions_collection, SessioningConcept.UNIQUE_KEYS)),
        )
        container.register_singleton(
            AuthingConcept,
            AuthingConcept(factory.create(settings.users_collection, AuthingConcept.UNIQUE_KEYS)),
        )
        container.register_singleton(
            PostingConcept,
            PostingConcept(factory.create(settings.posts_collection)),
        )
        container.register_singleton(
            FriendingConcept,
            FriendingConcept(
                friends=factory.create(settings.friends_collection, FriendingConcept.FRIENDSHIP_UNIQUE_KEYS),
                requests=factory.create(f"{settings.friends_collection}_requests"),
            ),
        )
        container.register_singleton(
            CommunitingConcept,
            CommunitingConcept(factory.create(settings.communities_collection, CommunitingConcept.UNIQUE_KEYS)),
        )
        container.register_singleton(
            FeedingConcept,
            FeedingConcept(factory.create(settings.feeds_collection, FeedingConcept.UNIQUE_KEYS)),
        )
        container.register_singleton(
            FavoritingConcept,
            FavoritingConcept(factory.create(settings.favorites_collection, FavoritingConcept.UNIQUE_KEYS)),
        )
        container.register_singleton(
            FeaturingConcept,
            FeaturingConcept(
                factory.create(settings.features_collection, FeaturingConcept.UNIQUE_KEYS),
                minimum_attention=settings.minimum_attention,
            ),
        )
