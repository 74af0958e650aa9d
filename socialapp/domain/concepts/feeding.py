"""
Feeding Concept
===============

concept: Feeding [Item]

A feed is an ordered bag of item references identified by an opaque feed
id. Each (feed, item) pair is either present or absent.
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.constants.feed_fields import FeedFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import FeedDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError

logger = logging.getLogger(__name__)


class FeedItemNoMatchError(NotFoundError):
    kind = "FeedItemNoMatch"

    def __init__(self, item: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is not an item of feed {1}", item, _id)
        self.item = item
        self._id = _id


class FeedItemExistsError(NotAllowedError):
    kind = "FeedItemExists"

    def __init__(self, item: ObjectId, _id: ObjectId) -> None:
        super().__init__("{0} is already an item of feed {1}", item, _id)
        self.item = item
        self._id = _id


class FeedingConcept:
    """Owns the feeds collection; one document per (feed, item) pair."""

    UNIQUE_KEYS = [(FeedFields.FEED, FeedFields.ITEM)]

    def __init__(self, feeds: DocCollection) -> None:
        self.feeds = feeds

    async def add_item(self, item: ObjectId, feed: ObjectId) -> Dict[str, Any]:
        await self.assert_item_not_in_feed(item, feed)

        try:
            await self.feeds.create_one({FeedFields.FEED: feed, FeedFields.ITEM: item})
        except DuplicateDocumentError as e:
            raise FeedItemExistsError(item, feed) from e

        logger.debug("Item %s added to feed %s", item, feed)
        return {"msg": "An item has been added to a feed!"}

    async def delete_item(self, item: ObjectId, feed: ObjectId) -> Dict[str, Any]:
        await self.assert_item_in_feed(item, feed)

        if not await self.feeds.delete_one({FeedFields.FEED: feed, FeedFields.ITEM: item}):
            raise FeedItemNoMatchError(item, feed)

        logger.debug("Item %s removed from feed %s", item, feed)
        return {"msg": "An item has been deleted from the feed!"}

    async def get_items(self, feed: ObjectId) -> List[FeedDoc]:
        return await self.feeds.read_many({FeedFields.FEED: feed}, sort=[(DocFields.ID, -1)])

    async def delete_feed(self, feed: ObjectId) -> Dict[str, Any]:
        removed = await self.feeds.delete_many({FeedFields.FEED: feed})
        logger.debug("Feed %s deleted (%d items)", feed, removed)
        return {"msg": "Feed deleted!", "removed": removed}

    async def delete_item_from_feeds(self, item: ObjectId) -> Dict[str, Any]:
        """Remove ``item`` from every feed that holds it."""
        removed = await self.feeds.delete_many({FeedFields.ITEM: item})
        logger.debug("Item %s removed from %d feeds", item, removed)
        return {"msg": "Item removed from feeds!", "removed": removed}

    async def assert_item_in_feed(self, item: ObjectId, feed: ObjectId) -> None:
        if await self.feeds.read_one({FeedFields.FEED: feed, FeedFields.ITEM: item}) is None:
            raise FeedItemNoMatchError(item, feed)

    async def assert_item_not_in_feed(self, item: ObjectId, feed: ObjectId) -> None:
        if await self.feeds.read_one({FeedFields.FEED: feed, FeedFields.ITEM: item}) is not None:
            raise FeedItemExistsError(item, feed)
