"""
Responses
=========

Conversions that make concept documents readable for the frontend, plus
the error resolvers registered in the enrichment registry.

Both only call read-only lookups on other concepts (ids -> usernames,
community id -> title).
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from socialapp.application.enrichment import EnrichmentRegistry
from socialapp.domain.concepts.authing import AuthingConcept
from socialapp.domain.concepts.communiting import (
    CommunitingConcept,
    CommunityAuthorNoMatchError,
    CommunityMemberExistsError,
    CommunityUserNoMatchError,
)
from socialapp.domain.concepts.favoriting import FavoriteItemExistsError, FavoriteItemNoMatchError
from socialapp.domain.concepts.feeding import FeedItemExistsError, FeedItemNoMatchError
from socialapp.domain.concepts.friending import (
    AlreadyFriendsError,
    FriendNotFoundError,
    FriendRequestAlreadyExistsError,
    FriendRequestNotFoundError,
    SelfFriendRequestError,
)
from socialapp.domain.concepts.posting import PostAuthorNotMatchError
from socialapp.domain.constants.community_fields import CommunityFields
from socialapp.domain.constants.friend_fields import FriendRequestFields
from socialapp.domain.constants.post_fields import PostFields
from socialapp.domain.models.documents import CommunityDoc, FriendRequestDoc, PostDoc

logger = logging.getLogger(__name__)


class Responses:
    """Denormalizes author/user ids into usernames."""

    def __init__(self, authing: AuthingConcept) -> None:
        self._authing = authing

    async def post(self, post: Optional[PostDoc]) -> Optional[Dict[str, Any]]:
        if post is None:
            return None
        (author,) = await self._authing.ids_to_usernames([post[PostFields.AUTHOR]])
        return {**post, PostFields.AUTHOR: author}

    async def posts(self, posts: List[PostDoc]) -> List[Dict[str, Any]]:
        # One lookup for the whole page
        authors = await self._authing.ids_to_usernames([post[PostFields.AUTHOR] for post in posts])
        return [{**post, PostFields.AUTHOR: author} for post, author in zip(posts, authors)]

    async def friend_requests(self, requests: List[FriendRequestDoc]) -> List[Dict[str, Any]]:
        senders = [request[FriendRequestFields.FROM] for request in requests]
        recipients = [request[FriendRequestFields.TO] for request in requests]
        usernames = await self._authing.ids_to_usernames(senders + recipients)
        count = len(requests)
        return [
            {
                **request,
                FriendRequestFields.FROM: usernames[i],
                FriendRequestFields.TO: usernames[i + count],
            }
            for i, request in enumerate(requests)
        ]

    async def community(self, community: Optional[CommunityDoc]) -> Optional[Dict[str, Any]]:
        if community is None:
            return None
        shaped = await self.communities([community])
        return shaped[0]

    async def communities(self, communities: List[CommunityDoc]) -> List[Dict[str, Any]]:
        authors = await self._authing.ids_to_usernames(
            [community[CommunityFields.AUTHOR] for community in communities]
        )
        return [
            {**community, CommunityFields.AUTHOR: author}
            for community, author in zip(communities, authors)
        ]


def register_error_resolvers(
    registry: EnrichmentRegistry,
    authing: AuthingConcept,
    communiting: CommunitingConcept,
) -> None:
    """Populate ``registry`` with resolvers for every parameterized concept error."""

    async def username(_id: ObjectId) -> str:
        (name,) = await authing.ids_to_usernames([_id])
        return name

    async def usernames(*ids: ObjectId) -> List[str]:
        return await authing.ids_to_usernames(list(ids))

    async def community_title(_id: ObjectId) -> str:
        community = await communiting.get_community_by_id(_id)
        return community[CommunityFields.TITLE] if community else str(_id)

    @registry.resolves(PostAuthorNotMatchError.kind)
    async def post_author_not_match(e: PostAuthorNotMatchError) -> str:
        return e.format_with(await username(e.author), e._id)

    @registry.resolves(FriendRequestAlreadyExistsError.kind)
    async def friend_request_exists(e: FriendRequestAlreadyExistsError) -> str:
        return e.format_with(*await usernames(e.from_, e.to))

    @registry.resolves(FriendRequestNotFoundError.kind)
    async def friend_request_not_found(e: FriendRequestNotFoundError) -> str:
        return e.format_with(*await usernames(e.from_, e.to))

    @registry.resolves(FriendNotFoundError.kind)
    async def friend_not_found(e: FriendNotFoundError) -> str:
        return e.format_with(*await usernames(e.user1, e.user2))

    @registry.resolves(AlreadyFriendsError.kind)
    async def already_friends(e: AlreadyFriendsError) -> str:
        return e.format_with(*await usernames(e.user1, e.user2))

    @registry.resolves(SelfFriendRequestError.kind)
    async def self_friend_request(e: SelfFriendRequestError) -> str:
        return e.format_with(await username(e.user))

    @registry.resolves(CommunityAuthorNoMatchError.kind)
    async def community_author_no_match(e: CommunityAuthorNoMatchError) -> str:
        return e.format_with(await username(e.author), await community_title(e._id))

    @registry.resolves(CommunityUserNoMatchError.kind)
    async def community_user_no_match(e: CommunityUserNoMatchError) -> str:
        return e.format_with(await username(e.member), await community_title(e._id))

    @registry.resolves(CommunityMemberExistsError.kind)
    async def community_member_exists(e: CommunityMemberExistsError) -> str:
        return e.format_with(await username(e.member), await community_title(e._id))

    # A community's feed id is the community id
    @registry.resolves(FeedItemExistsError.kind)
    async def feed_item_exists(e: FeedItemExistsError) -> str:
        return e.format_with(e.item, await community_title(e._id))

    @registry.resolves(FeedItemNoMatchError.kind)
    async def feed_item_no_match(e: FeedItemNoMatchError) -> str:
        return e.format_with(e.item, await community_title(e._id))

    @registry.resolves(FavoriteItemNoMatchError.kind)
    async def favorite_no_match(e: FavoriteItemNoMatchError) -> str:
        return e.format_with(await username(e.user), e.item)

    @registry.resolves(FavoriteItemExistsError.kind)
    async def favorite_exists(e: FavoriteItemExistsError) -> str:
        return e.format_with(await username(e.user), e.item)

    logger.info("Registered %d error resolvers", len(registry))
