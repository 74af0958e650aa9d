# test/test_feeding_favoriting.py
import asyncio

import pytest
from bson import ObjectId

from socialapp.domain.concepts.favoriting import FavoriteItemExistsError, FavoriteItemNoMatchError
from socialapp.domain.concepts.feeding import FeedItemExistsError, FeedItemNoMatchError
from socialapp.domain.errors import NotAllowedError, NotFoundError


@pytest.mark.asyncio
async def test_feed_item_presence_toggle(feeding):
    feed, item = ObjectId(), ObjectId()

    await feeding.add_item(item, feed)
    with pytest.raises(FeedItemExistsError):
        await feeding.add_item(item, feed)

    await feeding.delete_item(item, feed)
    with pytest.raises(FeedItemNoMatchError):
        await feeding.delete_item(item, feed)

    assert await feeding.get_items(feed) == []


@pytest.mark.asyncio
async def test_same_item_in_different_feeds(feeding):
    item = ObjectId()
    first, second = ObjectId(), ObjectId()

    await feeding.add_item(item, first)
    await feeding.add_item(item, second)

    assert [doc["item"] for doc in await feeding.get_items(first)] == [item]
    assert [doc["item"] for doc in await feeding.get_items(second)] == [item]


@pytest.mark.asyncio
async def test_delete_feed_removes_only_that_feed(feeding):
    feed, other = ObjectId(), ObjectId()
    for _ in range(3):
        await feeding.add_item(ObjectId(), feed)
    await feeding.add_item(ObjectId(), other)

    result = await feeding.delete_feed(feed)

    assert result["removed"] == 3
    assert await feeding.get_items(feed) == []
    assert len(await feeding.get_items(other)) == 1


@pytest.mark.asyncio
async def test_favorite_scenario(favoriting, alice):
    item = ObjectId()

    favorited = await favoriting.favorite(alice, item)
    assert favorited["favorite"]["user"] == alice

    with pytest.raises(FavoriteItemExistsError) as exc_info:
        await favoriting.favorite(alice, item)
    assert isinstance(exc_info.value, NotAllowedError)

    assert await favoriting.unfavorite(alice, item) == {"msg": "A user has unfavorited an item!"}

    with pytest.raises(FavoriteItemNoMatchError) as exc_info:
        await favoriting.unfavorite(alice, item)
    assert isinstance(exc_info.value, NotFoundError)


@pytest.mark.asyncio
async def test_num_favorites_counts_distinct_users(favoriting, alice, bob):
    item = ObjectId()

    await favoriting.favorite(alice, item)
    await favoriting.favorite(bob, item)
    await favoriting.favorite(alice, ObjectId())

    assert await favoriting.get_num_favorites(item) == {"num_favorites": 2}
    assert len(await favoriting.get_favorites(alice)) == 2


@pytest.mark.asyncio
async def test_delete_item_favorites(favoriting, alice, bob):
    item = ObjectId()
    await favoriting.favorite(alice, item)
    await favoriting.favorite(bob, item)

    result = await favoriting.delete_item_favorites(item)

    assert result["removed"] == 2
    assert await favoriting.get_num_favorites(item) == {"num_favorites": 0}


def _outcomes(results):
    failures = [result for result in results if isinstance(result, Exception)]
    return len(results) - len(failures), failures


@pytest.mark.asyncio
async def test_concurrent_adds_store_item_once(feeding):
    feed, item = ObjectId(), ObjectId()

    results = await asyncio.gather(*(feeding.add_item(item, feed) for _ in range(5)), return_exceptions=True)

    successes, failures = _outcomes(results)
    assert successes == 1
    assert all(isinstance(failure, FeedItemExistsError) for failure in failures)
    assert len(await feeding.get_items(feed)) == 1


@pytest.mark.asyncio
async def test_concurrent_deletes_remove_item_once(feeding):
    feed, item = ObjectId(), ObjectId()
    await feeding.add_item(item, feed)

    results = await asyncio.gather(*(feeding.delete_item(item, feed) for _ in range(5)), return_exceptions=True)

    successes, failures = _outcomes(results)
    assert successes == 1
    assert all(isinstance(failure, FeedItemNoMatchError) for failure in failures)
    assert await feeding.get_items(feed) == []


@pytest.mark.asyncio
async def test_delete_item_from_feeds(feeding):
    item, other = ObjectId(), ObjectId()
    first, second = ObjectId(), ObjectId()
    await feeding.add_item(item, first)
    await feeding.add_item(item, second)
    await feeding.add_item(other, first)

    assert (await feeding.delete_item_from_feeds(item))["removed"] == 2
    assert [doc["item"] for doc in await feeding.get_items(first)] == [other]
    assert await feeding.get_items(second) == []


@pytest.mark.asyncio
async def test_concurrent_favorites_store_pair_once(favoriting, alice):
    item = ObjectId()

    results = await asyncio.gather(*(favoriting.favorite(alice, item) for _ in range(5)), return_exceptions=True)

    successes, failures = _outcomes(results)
    assert successes == 1
    assert all(isinstance(failure, FavoriteItemExistsError) for failure in failures)
    assert await favoriting.get_num_favorites(item) == {"num_favorites": 1}


@pytest.mark.asyncio
async def test_concurrent_unfavorites_remove_pair_once(favoriting, alice):
    item = ObjectId()
    await favoriting.favorite(alice, item)

    results = await asyncio.gather(*(favoriting.unfavorite(alice, item) for _ in range(5)), return_exceptions=True)

    successes, failures = _outcomes(results)
    assert successes == 1
    assert all(isinstance(failure, FavoriteItemNoMatchError) for failure in failures)
    assert await favoriting.get_num_favorites(item) == {"num_favorites": 0}
