"""
Posting Concept
===============

concept: Posting [Author]
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.constants.post_fields import PostFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import PostDoc, PostOptions
from socialapp.domain.repositories.doc_collection import DocCollection

logger = logging.getLogger(__name__)


class PostNotFoundError(NotFoundError):
    kind = "PostNotFound"

    def __init__(self, _id: ObjectId) -> None:
        super().__init__("Post {0} does not exist!", _id)
        self._id = _id


class PostAuthorNotMatchError(NotAllowedError):
    kind = "PostAuthorNotMatch"

    def __init__(self, author: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is not the author of post {1}!", author, _id)
        self.author = author
        self._id = _id


class PostingConcept:

    def __init__(self, posts: DocCollection) -> None:
        self.posts = posts

    async def create(self, author: ObjectId, content: str, options: Optional[PostOptions] = None) -> Dict[str, Any]:
        _id = await self.posts.create_one({
            PostFields.AUTHOR: author,
            PostFields.CONTENT: content,
            PostFields.OPTIONS: dict(options or {}),
        })
        logger.debug("Post %s created by %s", _id, author)
        return {"msg": "Post successfully created!", "post": await self.get_post(_id)}

    async def get_post(self, _id: ObjectId) -> Optional[PostDoc]:
        return await self.posts.read_one({DocFields.ID: _id})

    async def get_posts(self) -> List[PostDoc]:
        return await self.posts.read_many({}, sort=[(DocFields.ID, -1)])

    async def get_by_author(self, author: ObjectId) -> List[PostDoc]:
        return await self.posts.read_many({PostFields.AUTHOR: author}, sort=[(DocFields.ID, -1)])

    async def update(
        self,
        _id: ObjectId,
        content: Optional[str] = None,
        options: Optional[PostOptions] = None,
    ) -> Dict[str, Any]:
        patch: Dict[str, Any] = {}
        if content is not None:
            patch[PostFields.CONTENT] = content
        if options is not None:
            patch[PostFields.OPTIONS] = dict(options)

        if not await self.posts.partial_update_one({DocFields.ID: _id}, patch):
            raise PostNotFoundError(_id)
        return {"msg": "Post successfully updated!"}

    async def delete(self, _id: ObjectId) -> Dict[str, Any]:
        if not await self.posts.delete_one({DocFields.ID: _id}):
            raise PostNotFoundError(_id)
        logger.debug("Post %s deleted", _id)
        return {"msg": "Post deleted successfully!"}

    async def assert_post_exists(self, _id: ObjectId) -> None:
        if await self.get_post(_id) is None:
            raise PostNotFoundError(_id)

    async def assert_author_is_user(self, user: ObjectId, _id: ObjectId) -> None:
        post = await self.get_post(_id)
        if post is None:
            raise PostNotFoundError(_id)
        if post[PostFields.AUTHOR] != user:
            raise PostAuthorNotMatchError(user, _id)
