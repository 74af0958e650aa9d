"""
Synchronizations
================

Application service that composes the concepts.

Each method serves one endpoint: it identifies the caller from the session
token, runs every assertion the request needs (across any concepts) before
the first mutation, performs the action(s), and shapes the response.

Requests that chain several mutations are best effort: if a later step
fails, earlier steps are not rolled back.
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from socialapp.application.responses import Responses
from socialapp.domain.concepts.authing import AuthingConcept
from socialapp.domain.concepts.communiting import CommunitingConcept
from socialapp.domain.concepts.favoriting import FavoritingConcept
from socialapp.domain.concepts.featuring import FeaturingConcept
from socialapp.domain.concepts.feeding import FeedingConcept
from socialapp.domain.concepts.friending import FriendingConcept
from socialapp.domain.concepts.posting import PostingConcept
from socialapp.domain.concepts.sessioning import SessioningConcept
from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.models.documents import PostOptions

logger = logging.getLogger(__name__)

SessionToken = Optional[str]


class Synchronizations:
    """
    Per-endpoint orchestration of the concepts.

    Concepts are injected; this class is the only code that knows more
    than one of them.
    """

    def __init__(
        self,
        sessioning: SessioningConcept,
        authing: AuthingConcept,
        posting: PostingConcept,
        friending: FriendingConcept,
        communiting: CommunitingConcept,
        feeding: FeedingConcept,
        favoriting: FavoritingConcept,
        featuring: FeaturingConcept,
        responses: Responses,
    ) -> None:
        self.sessioning = sessioning
        self.authing = authing
        self.posting = posting
        self.friending = friending
        self.communiting = communiting
        self.feeding = feeding
        self.favoriting = favoriting
        self.featuring = featuring
        self.responses = responses

    # ------------------------------------------------------------------
    # Sessions and accounts
    # ------------------------------------------------------------------

    async def get_session_user(self, session: SessionToken) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.authing.get_user_by_id(user)

    async def get_users(self) -> List[Dict[str, Any]]:
        return await self.authing.get_users()

    async def get_user(self, username: str) -> Dict[str, Any]:
        return await self.authing.get_user_by_username(username)

    async def create_user(self, session: SessionToken, username: str, password: str) -> Dict[str, Any]:
        await self.sessioning.is_logged_out(session)
        return await self.authing.create(username, password)

    async def update_username(self, session: SessionToken, username: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.authing.update_username(user, username)

    async def update_password(
        self, session: SessionToken, current_password: str, new_password: str
    ) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.authing.update_password(user, current_password, new_password)

    async def delete_user(self, session: SessionToken) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.sessioning.end_all(user)
        return await self.authing.delete(user)

    async def log_in(self, session: SessionToken, username: str, password: str) -> Dict[str, Any]:
        await self.sessioning.is_logged_out(session)
        authenticated = await self.authing.authenticate(username, password)
        token = await self.sessioning.start(authenticated[DocFields.ID])
        logger.info("User %s logged in", username)
        return {"msg": "Logged in!", "token": token}

    async def log_out(self, session: SessionToken) -> Dict[str, Any]:
        await self.sessioning.end(session)
        return {"msg": "Logged out!"}

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def get_posts(self, author: Optional[str] = None) -> List[Dict[str, Any]]:
        if author:
            author_id = (await self.authing.get_user_by_username(author))[DocFields.ID]
            posts = await self.posting.get_by_author(author_id)
        else:
            posts = await self.posting.get_posts()
        return await self.responses.posts(posts)

    async def create_post(
        self, session: SessionToken, content: str, options: Optional[PostOptions] = None
    ) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        created = await self.posting.create(user, content, options)
        return {"msg": created["msg"], "post": await self.responses.post(created["post"])}

    async def update_post(
        self,
        session: SessionToken,
        _id: ObjectId,
        content: Optional[str] = None,
        options: Optional[PostOptions] = None,
    ) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.posting.assert_author_is_user(user, _id)
        return await self.posting.update(_id, content, options)

    async def delete_post(self, session: SessionToken, _id: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.posting.assert_author_is_user(user, _id)
        # Post first, then everything that references it (best effort)
        deleted = await self.posting.delete(_id)
        await self.favoriting.delete_item_favorites(_id)
        await self.feeding.delete_item_from_feeds(_id)
        await self.featuring.delete_item(_id)
        return deleted

    # ------------------------------------------------------------------
    # Friends
    # ------------------------------------------------------------------

    async def get_friends(self, session: SessionToken) -> List[str]:
        user = await self.sessioning.get_user(session)
        return await self.authing.ids_to_usernames(await self.friending.get_friends(user))

    async def remove_friend(self, session: SessionToken, friend: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        friend_id = (await self.authing.get_user_by_username(friend))[DocFields.ID]
        return await self.friending.remove_friend(user, friend_id)

    async def get_requests(self, session: SessionToken) -> List[Dict[str, Any]]:
        user = await self.sessioning.get_user(session)
        return await self.responses.friend_requests(await self.friending.get_requests(user))

    async def send_friend_request(self, session: SessionToken, to: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        to_id = (await self.authing.get_user_by_username(to))[DocFields.ID]
        return await self.friending.send_request(user, to_id)

    async def remove_friend_request(self, session: SessionToken, to: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        to_id = (await self.authing.get_user_by_username(to))[DocFields.ID]
        return await self.friending.remove_request(user, to_id)

    async def accept_friend_request(self, session: SessionToken, from_: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        from_id = (await self.authing.get_user_by_username(from_))[DocFields.ID]
        return await self.friending.accept_request(from_id, user)

    async def reject_friend_request(self, session: SessionToken, from_: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        from_id = (await self.authing.get_user_by_username(from_))[DocFields.ID]
        return await self.friending.reject_request(from_id, user)

    # ------------------------------------------------------------------
    # Communities and their feeds
    # ------------------------------------------------------------------

    async def create_community(self, session: SessionToken, title: str, description: str) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        created = await self.communiting.create(user, title, description)
        return {"msg": created["msg"], "community": await self.responses.community(created["community"])}

    async def get_communities(self, title: Optional[str] = None) -> Any:
        if title:
            return await self.responses.community(await self.communiting.get_community_by_title(title))
        return await self.responses.communities(await self.communiting.get_communities())

    async def delete_community(self, session: SessionToken, _id: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.communiting.assert_author_is_user(user, _id)

        # Community first: a leftover feed of a deleted community is unreachable
        deleted = await self.communiting.delete(_id)
        await self.feeding.delete_feed(_id)
        return deleted

    async def join_community(self, session: SessionToken, _id: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.communiting.join(user, _id)

    async def leave_community(self, session: SessionToken, _id: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.communiting.leave(user, _id)

    async def get_num_members(self, _id: ObjectId) -> Dict[str, int]:
        return await self.communiting.get_num_members(_id)

    async def get_community_items(self, _id: ObjectId) -> List[Dict[str, Any]]:
        await self.communiting.assert_community_exists(_id)
        return await self.feeding.get_items(_id)

    async def add_community_item(self, session: SessionToken, _id: ObjectId, item: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.communiting.assert_user_in_community(user, _id)
        await self.posting.assert_post_exists(item)
        return await self.feeding.add_item(item, _id)

    async def delete_community_item(self, session: SessionToken, _id: ObjectId, item: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.communiting.assert_user_in_community(user, _id)
        return await self.feeding.delete_item(item, _id)

    # ------------------------------------------------------------------
    # Favorites and featuring
    # ------------------------------------------------------------------

    async def favorite_item(self, session: SessionToken, item: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        await self.posting.assert_post_exists(item)
        return await self.favoriting.favorite(user, item)

    async def unfavorite_item(self, session: SessionToken, item: ObjectId) -> Dict[str, Any]:
        user = await self.sessioning.get_user(session)
        return await self.favoriting.unfavorite(user, item)

    async def get_num_favorites(self, item: ObjectId) -> Dict[str, int]:
        return await self.favoriting.get_num_favorites(item)

    async def get_favorites(self, username: str) -> List[Dict[str, Any]]:
        user = (await self.authing.get_user_by_username(username))[DocFields.ID]
        return await self.favoriting.get_favorites(user)

    async def get_featured(self) -> List[Dict[str, Any]]:
        return await self.featuring.get_featured()

    async def promote_item(self, item: ObjectId) -> Dict[str, Any]:
        # Attention is the number of users who favorited the post
        await self.posting.assert_post_exists(item)
        attention = (await self.favoriting.get_num_favorites(item))["num_favorites"]
        return await self.featuring.promote(item, attention)

    async def depromote_item(self, item: ObjectId) -> Dict[str, Any]:
        attention = (await self.favoriting.get_num_favorites(item))["num_favorites"]
        return await self.featuring.depromote(item, attention)
