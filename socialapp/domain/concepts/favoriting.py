"""
Favoriting Concept
==================

concept: Favoriting [User, Item]
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.constants.favorite_fields import FavoriteFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import FavoriteDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError

logger = logging.getLogger(__name__)


class FavoriteItemNoMatchError(NotFoundError):
    kind = "FavoriteItemNoMatch"

    def __init__(self, user: ObjectId, item: ObjectId) -> None:
        super().__init__("{0} has not favorited item {1}", user, item)
        self.user = user
        self.item = item


class FavoriteItemExistsError(NotAllowedError):
    kind = "FavoriteItemExists"

    def __init__(self, user: ObjectId, item: ObjectId) -> None:
        super().__init__("{0} has already favorited item {1}", user, item)
        self.user = user
        self.item = item


class FavoritingConcept:

    UNIQUE_KEYS = [(FavoriteFields.USER, FavoriteFields.ITEM)]

    def __init__(self, favorites: DocCollection) -> None:
        self.favorites = favorites

    async def favorite(self, user: ObjectId, item: ObjectId) -> Dict[str, Any]:
        await self.assert_item_is_not_favorite(user, item)

        try:
            _id = await self.favorites.create_one({FavoriteFields.USER: user, FavoriteFields.ITEM: item})
        except DuplicateDocumentError as e:
            raise FavoriteItemExistsError(user, item) from e

        logger.debug("User %s favorited %s", user, item)
        return {
            "msg": "A user has favorited an item!",
            "favorite": await self.favorites.read_one({DocFields.ID: _id}),
        }

    async def unfavorite(self, user: ObjectId, item: ObjectId) -> Dict[str, Any]:
        await self.assert_item_is_favorite(user, item)

        if not await self.favorites.delete_one({FavoriteFields.USER: user, FavoriteFields.ITEM: item}):
            raise FavoriteItemNoMatchError(user, item)

        logger.debug("User %s unfavorited %s", user, item)
        return {"msg": "A user has unfavorited an item!"}

    async def get_num_favorites(self, item: ObjectId) -> Dict[str, int]:
        return {"num_favorites": await self.favorites.count({FavoriteFields.ITEM: item})}

    async def get_favorites(self, user: ObjectId) -> List[FavoriteDoc]:
        return await self.favorites.read_many({FavoriteFields.USER: user}, sort=[(DocFields.ID, -1)])

    async def delete_item_favorites(self, item: ObjectId) -> Dict[str, Any]:
        removed = await self.favorites.delete_many({FavoriteFields.ITEM: item})
        return {"msg": "Favorites cleared!", "removed": removed}

    async def assert_item_is_favorite(self, user: ObjectId, item: ObjectId) -> None:
        if await self.favorites.read_one({FavoriteFields.USER: user, FavoriteFields.ITEM: item}) is None:
            raise FavoriteItemNoMatchError(user, item)

    async def assert_item_is_not_favorite(self, user: ObjectId, item: ObjectId) -> None:
        if await self.favorites.read_one({FavoriteFields.USER: user, FavoriteFields.ITEM: item}) is not None:
            raise FavoriteItemExistsError(user, item)
