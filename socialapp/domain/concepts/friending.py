"""
Friending Concept
=================

concept: Friending [User]

Users send friend requests; the recipient accepts (the request disappears
and a symmetric friendship appears) or rejects it. At most one pending
request may exist between two users, in either direction.

Request actions on the same pair of users are serialized with a keyed
lock, since "no pending request in either direction" cannot be expressed
as a unique index.
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId

from socialapp.domain.constants.friend_fields import FriendRequestFields, FriendshipFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import FriendRequestDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError
from socialapp.utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


def pair_key(user1: ObjectId, user2: ObjectId) -> str:
    """Order-independent key identifying two users."""
    first, second = sorted((str(user1), str(user2)))
    return f"{first}:{second}"


class FriendRequestAlreadyExistsError(NotAllowedError):
    kind = "FriendRequestAlreadyExists"

    def __init__(self, from_: ObjectId, to: ObjectId) -> None:
        super().__init__("Friend request between {0} and {1} already exists!", from_, to)
        self.from_ = from_
        self.to = to


class FriendRequestNotFoundError(NotFoundError):
    kind = "FriendRequestNotFound"

    def __init__(self, from_: ObjectId, to: ObjectId) -> None:
        super().__init__("Friend request from {0} to {1} does not exist!", from_, to)
        self.from_ = from_
        self.to = to


class AlreadyFriendsError(NotAllowedError):
    kind = "AlreadyFriends"

    def __init__(self, user1: ObjectId, user2: ObjectId) -> None:
        super().__init__("{0} and {1} are already friends!", user1, user2)
        self.user1 = user1
        self.user2 = user2


class FriendNotFoundError(NotFoundError):
    kind = "FriendNotFound"

    def __init__(self, user1: ObjectId, user2: ObjectId) -> None:
        super().__init__("Friendship between {0} and {1} does not exist!", user1, user2)
        self.user1 = user1
        self.user2 = user2


class SelfFriendRequestError(NotAllowedError):
    kind = "SelfFriendRequest"

    def __init__(self, user: ObjectId) -> None:
        super().__init__("{0} cannot befriend themselves!", user)
        self.user = user


class FriendingConcept:
    """Owns two collections: friendships and friend requests."""

    FRIENDSHIP_UNIQUE_KEYS = [(FriendshipFields.PAIR,)]

    def __init__(self, friends: DocCollection, requests: DocCollection) -> None:
        self.friends = friends
        self.requests = requests
        self._pair_locks = KeyedLock()

    async def get_requests(self, user: ObjectId) -> List[FriendRequestDoc]:
        return await self.requests.read_many({
            "$or": [{FriendRequestFields.FROM: user}, {FriendRequestFields.TO: user}],
        })

    async def send_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        async with self._pair_locks.hold(pair_key(from_, to)):
            await self.assert_can_send_request(from_, to)
            await self.requests.create_one({
                FriendRequestFields.FROM: from_,
                FriendRequestFields.TO: to,
                FriendRequestFields.STATUS: FriendRequestFields.PENDING,
            })
        logger.debug("Friend request %s -> %s sent", from_, to)
        return {"msg": "Sent request!"}

    async def accept_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        async with self._pair_locks.hold(pair_key(from_, to)):
            await self._remove_pending_request(from_, to)
            await self._add_friend(from_, to)
        logger.debug("Friend request %s -> %s accepted", from_, to)
        return {"msg": "Accepted request!"}

    async def reject_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        async with self._pair_locks.hold(pair_key(from_, to)):
            matched = await self.requests.partial_update_one(
                self._pending_filter(from_, to),
                {FriendRequestFields.STATUS: FriendRequestFields.REJECTED},
            )
            if not matched:
                raise FriendRequestNotFoundError(from_, to)
        logger.debug("Friend request %s -> %s rejected", from_, to)
        return {"msg": "Rejected request!"}

    async def remove_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        async with self._pair_locks.hold(pair_key(from_, to)):
            await self._remove_pending_request(from_, to)
        return {"msg": "Removed request!"}

    async def remove_friend(self, user: ObjectId, friend: ObjectId) -> Dict[str, Any]:
        if not await self.friends.delete_one({FriendshipFields.PAIR: pair_key(user, friend)}):
            raise FriendNotFoundError(user, friend)
        logger.debug("Friendship %s <-> %s removed", user, friend)
        return {"msg": "Unfriended!"}

    async def get_friends(self, user: ObjectId) -> List[ObjectId]:
        friendships = await self.friends.read_many({
            "$or": [{FriendshipFields.USER1: user}, {FriendshipFields.USER2: user}],
        })
        return [
            friendship[FriendshipFields.USER2]
            if friendship[FriendshipFields.USER1] == user
            else friendship[FriendshipFields.USER1]
            for friendship in friendships
        ]

    def _pending_filter(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        return {
            FriendRequestFields.FROM: from_,
            FriendRequestFields.TO: to,
            FriendRequestFields.STATUS: FriendRequestFields.PENDING,
        }

    async def _remove_pending_request(self, from_: ObjectId, to: ObjectId) -> None:
        if not await self.requests.delete_one(self._pending_filter(from_, to)):
            raise FriendRequestNotFoundError(from_, to)

    async def _add_friend(self, user1: ObjectId, user2: ObjectId) -> None:
        try:
            await self.friends.create_one({
                FriendshipFields.USER1: user1,
                FriendshipFields.USER2: user2,
                FriendshipFields.PAIR: pair_key(user1, user2),
            })
        except DuplicateDocumentError as e:
            raise AlreadyFriendsError(user1, user2) from e

    async def assert_not_friends(self, user1: ObjectId, user2: ObjectId) -> None:
        if await self.friends.read_one({FriendshipFields.PAIR: pair_key(user1, user2)}) is not None:
            raise AlreadyFriendsError(user1, user2)

    async def assert_can_send_request(self, from_: ObjectId, to: ObjectId) -> None:
        if from_ == to:
            raise SelfFriendRequestError(from_)
        await self.assert_not_friends(from_, to)
        pending = await self.requests.read_one({
            "$or": [self._pending_filter(from_, to), self._pending_filter(to, from_)],
        })
        if pending is not None:
            raise FriendRequestAlreadyExistsError(from_, to)
