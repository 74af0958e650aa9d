# test/test_featuring.py
import asyncio

import pytest
from bson import ObjectId

from socialapp.domain.concepts.featuring import FeatureExistsError, FeatureNotFoundError


@pytest.mark.asyncio
async def test_promotion_threshold_scenario(featuring):
    item = ObjectId()

    result = await featuring.promote(item, 5)
    assert result["featured"] is False
    assert "didn't meet the minimum attention" in result["msg"]
    assert await featuring.get_featured() == []

    result = await featuring.promote(item, 15)
    assert result == {"msg": "An item has been promoted!", "featured": True}
    assert [doc["item"] for doc in await featuring.get_featured()] == [item]

    result = await featuring.depromote(item, 20)
    assert result["featured"] is True
    assert "still has the minimum attention" in result["msg"]
    assert len(await featuring.get_featured()) == 1


@pytest.mark.asyncio
async def test_threshold_is_inclusive(featuring):
    item = ObjectId()

    assert (await featuring.promote(item, 10))["featured"] is True


@pytest.mark.asyncio
async def test_depromote_below_threshold(featuring):
    item = ObjectId()
    await featuring.promote(item, 12)

    result = await featuring.depromote(item, 3)

    assert result == {"msg": "An item has been depromoted!", "featured": False}
    assert await featuring.get_featured() == []


@pytest.mark.asyncio
async def test_promote_twice_is_not_allowed(featuring):
    item = ObjectId()
    await featuring.promote(item, 50)

    with pytest.raises(FeatureExistsError):
        await featuring.promote(item, 50)


@pytest.mark.asyncio
async def test_depromote_unfeatured_item(featuring):
    with pytest.raises(FeatureNotFoundError):
        await featuring.depromote(ObjectId(), 0)


@pytest.mark.asyncio
async def test_concurrent_promotions_feature_once(featuring):
    item = ObjectId()

    results = await asyncio.gather(*(featuring.promote(item, 15) for _ in range(5)), return_exceptions=True)

    failures = [result for result in results if isinstance(result, Exception)]
    assert len(results) - len(failures) == 1
    assert all(isinstance(failure, FeatureExistsError) for failure in failures)
    assert len(await featuring.get_featured()) == 1


@pytest.mark.asyncio
async def test_concurrent_depromotions_remove_once(featuring):
    item = ObjectId()
    await featuring.promote(item, 15)

    results = await asyncio.gather(*(featuring.depromote(item, 0) for _ in range(5)), return_exceptions=True)

    failures = [result for result in results if isinstance(result, Exception)]
    assert len(results) - len(failures) == 1
    assert all(isinstance(failure, FeatureNotFoundError) for failure in failures)
    assert await featuring.get_featured() == []


@pytest.mark.asyncio
async def test_delete_item_ignores_attention(featuring):
    item = ObjectId()
    await featuring.promote(item, 50)

    assert (await featuring.delete_item(item))["removed"] == 1
    assert await featuring.get_featured() == []
    assert (await featuring.delete_item(item))["removed"] == 0
