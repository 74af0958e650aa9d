"""
Communiting Concept
===================

concept: Communiting [User]

Named groups of users. The author creates a community and is its first
member; other users join and leave. Membership behaves as a set: a user is
either present or absent, and joining twice or leaving twice is an error.
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from socialapp.domain.constants.community_fields import CommunityFields
from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import CommunityDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError

logger = logging.getLogger(__name__)


class CommunityExistsError(NotAllowedError):
    kind = "CommunityExists"

    def __init__(self, title: str) -> None:
        super().__init__("Community already exists: {0}", title)
        self.title = title


class CommunityNotFoundError(NotFoundError):
    kind = "CommunityNotFound"

    def __init__(self, _id: ObjectId) -> None:
        super().__init__("Community {0} doesn't exist!", _id)
        self._id = _id


class CommunityAuthorNoMatchError(NotAllowedError):
    kind = "CommunityAuthorNoMatch"

    def __init__(self, author: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is not the author of community {1}", author, _id)
        self.author = author
        self._id = _id


class CommunityUserNoMatchError(NotFoundError):
    kind = "CommunityUserNoMatch"

    def __init__(self, member: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is not a member of community {1}", member, _id)
        self.member = member
        self._id = _id


class CommunityMemberExistsError(NotAllowedError):
    kind = "CommunityMemberExists"

    def __init__(self, member: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is already a member of community {1}", member, _id)
        self.member = member
        self._id = _id


class CommunitingConcept:
    """Owns the communities collection."""

    UNIQUE_KEYS = [(CommunityFields.TITLE,)]

    def __init__(self, communities: DocCollection) -> None:
        self.communities = communities

    async def create(self, author: ObjectId, title: str, description: str) -> Dict[str, Any]:
        await self.assert_community_not_exists(title)

        try:
            _id = await self.communities.create_one({
                CommunityFields.AUTHOR: author,
                CommunityFields.TITLE: title,
                CommunityFields.DESCRIPTION: description,
                CommunityFields.MEMBERS: [author],
            })
        except DuplicateDocumentError as e:
            # Another request created the same title after our check
            raise CommunityExistsError(title) from e

        logger.debug("Community %s created by %s", _id, author)
        return {"msg": "Community successfully created!", "community": await self.get_community_by_id(_id)}

    async def delete(self, _id: ObjectId) -> Dict[str, Any]:
        if not await self.communities.delete_one({DocFields.ID: _id}):
            raise CommunityNotFoundError(_id)
        logger.debug("Community %s deleted", _id)
        return {"msg": "Community successfully deleted!"}

    async def get_community_by_id(self, _id: ObjectId) -> Optional[CommunityDoc]:
        return await self.communities.read_one({DocFields.ID: _id})

    async def get_community_by_title(self, title: str) -> Optional[CommunityDoc]:
        return await self.communities.read_one({CommunityFields.TITLE: title})

    async def get_communities(self) -> List[CommunityDoc]:
        return await self.communities.read_many({}, sort=[(DocFields.ID, -1)])

    async def get_num_members(self, _id: ObjectId) -> Dict[str, int]:
        community = await self._get_existing(_id)
        return {"num_members": len(community[CommunityFields.MEMBERS])}

    async def join(self, user: ObjectId, _id: ObjectId) -> Dict[str, Any]:
        await self.assert_user_not_in_community(user, _id)

        if not await self.communities.add_to_set_one({DocFields.ID: _id}, CommunityFields.MEMBERS, user):
            # Lost a race: either the user joined meanwhile or the community is gone
            await self.assert_community_exists(_id)
            raise CommunityMemberExistsError(user, _id)

        logger.debug("User %s joined community %s", user, _id)
        return {"msg": "A user has joined the community!"}

    async def leave(self, user: ObjectId, _id: ObjectId) -> Dict[str, Any]:
        await self.assert_user_in_community(user, _id)

        if not await self.communities.pull_one({DocFields.ID: _id}, CommunityFields.MEMBERS, user):
            await self.assert_community_exists(_id)
            raise CommunityUserNoMatchError(user, _id)

        logger.debug("User %s left community %s", user, _id)
        return {"msg": "A user has left the community!"}

    async def _get_existing(self, _id: ObjectId) -> CommunityDoc:
        community = await self.get_community_by_id(_id)
        if community is None:
            raise CommunityNotFoundError(_id)
        return community

    async def assert_author_is_user(self, user: ObjectId, _id: ObjectId) -> None:
        community = await self._get_existing(_id)
        if community[CommunityFields.AUTHOR] != user:
            raise CommunityAuthorNoMatchError(user, _id)

    async def assert_user_in_community(self, user: ObjectId, _id: ObjectId) -> None:
        community = await self._get_existing(_id)
        if user not in community[CommunityFields.MEMBERS]:
            raise CommunityUserNoMatchError(user, _id)

    async def assert_user_not_in_community(self, user: ObjectId, _id: ObjectId) -> None:
        community = await self._get_existing(_id)
        if user in community[CommunityFields.MEMBERS]:
            raise CommunityMemberExistsError(user, _id)

    async def assert_community_not_exists(self, title: str) -> None:
        if await self.get_community_by_title(title) is not None:
            raise CommunityExistsError(title)

    async def assert_community_exists(self, _id: ObjectId) -> None:
        await self._get_existing(_id)
