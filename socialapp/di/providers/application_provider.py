from typing import TYPE_CHECKING

from ...application.enrichment import EnrichmentRegistry
from ...application.responses import Responses, register_error_resolvers
from ...application.synchronizations import Synchronizations
from ...domain.concepts.authing import AuthingConcept
from ...domain.concepts.communiting import CommunitingConcept
from ...domain.concepts.favoriting import FavoritingConcept
from ...domain.concepts.featuring import FeaturingConcept
from ...domain.concepts.feeding import FeedingConcept
from ...domain.concepts.friending import FriendingConcept
from ...domain.concepts.posting import PostingConcept
from ...domain.concepts.sessioning import SessioningConcept

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ApplicationProvider:
    """Application provider - enrichment registry, responses and synchronizations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register application services.
        The enrichment registry is filled here, once, before any request.
        """
        authing = container.get(AuthingConcept)
        communiting = container.get(CommunitingConcept)

        registry = EnrichmentRegistry()
        register_error_resolvers(registry, authing, communiting)
        container.register_singleton(EnrichmentRegistry, registry)

        responses = Responses(authing)
        container.register_singleton(Responses, responses)

        container.register_singleton(
            Synchronizations,
            Synchronizations(
                sessioning=container.get(SessioningConcept),
                authing=authing,
                posting=container.get(PostingConcept),
                friending=container.get(FriendingConcept),
                communiting=communiting,
                feeding=container.get(FeedingConcept),
                favoriting=container.get(FavoritingConcept),
                featuring=container.get(FeaturingConcept),
                responses=responses,
            ),
        )
