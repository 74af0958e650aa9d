"""
Featuring Concept
=================

concept: Featuring [Item, Number]

Items are promoted once their attention reaches ``minimum_attention`` and
depromoted once it falls below. Missing the threshold is not an error: the
action succeeds with an informational message and changes nothing.
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.constants.feature_fields import FeatureFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import FeatureDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError

logger = logging.getLogger(__name__)


class FeatureNotFoundError(NotFoundError):
    kind = "FeatureNotFound"

    def __init__(self, item: ObjectId) -> None:
        super().__init__("Item {0} is not featured!", item)
        self.item = item


class FeatureExistsError(NotAllowedError):
    kind = "FeatureExists"

    def __init__(self, item: ObjectId) -> None:
        super().__init__("Item {0} is already featured!", item)
        self.item = item


class FeaturingConcept:

    UNIQUE_KEYS = [(FeatureFields.ITEM,)]

    def __init__(self, features: DocCollection, minimum_attention: int) -> None:
        self.features = features
        self.minimum_attention = minimum_attention

    async def promote(self, item: ObjectId, attention: int) -> Dict[str, Any]:
        await self.assert_item_is_not_featured(item)

        if attention < self.minimum_attention:
            return {"msg": "The item didn't meet the minimum attention.", "featured": False}

        try:
            await self.features.create_one({FeatureFields.ITEM: item})
        except DuplicateDocumentError as e:
            raise FeatureExistsError(item) from e

        logger.debug("Item %s promoted with attention %d", item, attention)
        return {"msg": "An item has been promoted!", "featured": True}

    async def depromote(self, item: ObjectId, attention: int) -> Dict[str, Any]:
        await self.assert_item_is_featured(item)

        if attention >= self.minimum_attention:
            return {"msg": "The item still has the minimum attention.", "featured": True}

        if not await self.features.delete_one({FeatureFields.ITEM: item}):
            raise FeatureNotFoundError(item)

        logger.debug("Item %s depromoted with attention %d", item, attention)
        return {"msg": "An item has been depromoted!", "featured": False}

    async def delete_item(self, item: ObjectId) -> Dict[str, Any]:
        """Drop the feature of an item that no longer exists, regardless of attention."""
        removed = await self.features.delete_many({FeatureFields.ITEM: item})
        return {"msg": "Feature cleared!", "removed": removed}

    async def get_featured(self) -> List[FeatureDoc]:
        return await self.features.read_many({}, sort=[(DocFields.ID, -1)])

    async def assert_item_is_featured(self, item: ObjectId) -> None:
        if await self.features.read_one({FeatureFields.ITEM: item}) is None:
            raise FeatureNotFoundError(item)

    async def assert_item_is_not_featured(self, item: ObjectId) -> None:
        if await self.features.read_one({FeatureFields.ITEM: item}) is not None:
            raise FeatureExistsError(item)
