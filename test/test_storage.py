# test/test_storage.py
import asyncio

import pytest
from bson import ObjectId

from socialapp.domain.repositories.doc_collection import DuplicateDocumentError
from socialapp.infrastructure.db.collection_factory import CollectionFactory
from socialapp.infrastructure.db.memory_doc_collection import InMemoryDocCollection, matches
from socialapp.utils.keyed_lock import KeyedLock


def test_matches_supports_query_subset():
    doc = {"a": 1, "tags": ["x", "y"]}

    assert matches(doc, {"a": 1})
    assert matches(doc, {"tags": "x"})
    assert matches(doc, {"a": {"$in": [0, 1]}})
    assert matches(doc, {"a": {"$ne": 2}})
    assert matches(doc, {"$or": [{"a": 2}, {"tags": "y"}]})
    assert not matches(doc, {"tags": {"$ne": "x"}})
    assert not matches(doc, {"missing": 1})


def test_matches_rejects_unknown_operator():
    with pytest.raises(ValueError):
        matches({"a": 1}, {"a": {"$gt": 0}})


@pytest.mark.asyncio
async def test_create_sets_id_and_timestamps():
    collection = InMemoryDocCollection("things")

    _id = await collection.create_one({"name": "one"})
    doc = await collection.read_one({"_id": _id})

    assert isinstance(_id, ObjectId)
    assert doc["date_created"] == doc["date_updated"]
    assert doc["date_created"].tzinfo is not None


@pytest.mark.asyncio
async def test_read_returns_copies():
    collection = InMemoryDocCollection("things")
    _id = await collection.create_one({"tags": ["a"]})

    doc = await collection.read_one({"_id": _id})
    doc["tags"].append("b")

    assert (await collection.read_one({"_id": _id}))["tags"] == ["a"]


@pytest.mark.asyncio
async def test_compound_unique_keys():
    collection = InMemoryDocCollection("things", [("feed", "item")])
    await collection.create_one({"feed": 1, "item": 1})
    await collection.create_one({"feed": 1, "item": 2})

    with pytest.raises(DuplicateDocumentError):
        await collection.create_one({"feed": 1, "item": 1})


@pytest.mark.asyncio
async def test_sort_by_several_keys():
    collection = InMemoryDocCollection("things")
    for group, rank in [(1, 2), (2, 1), (1, 1)]:
        await collection.create_one({"group": group, "rank": rank})

    docs = await collection.read_many({}, sort=[("group", 1), ("rank", -1)])

    assert [(doc["group"], doc["rank"]) for doc in docs] == [(1, 2), (1, 1), (2, 1)]


@pytest.mark.asyncio
async def test_set_primitives_report_changes():
    collection = InMemoryDocCollection("things")
    _id = await collection.create_one({"members": []})

    assert await collection.add_to_set_one({"_id": _id}, "members", "a") is True
    assert await collection.add_to_set_one({"_id": _id}, "members", "a") is False
    assert await collection.pull_one({"_id": _id}, "members", "a") is True
    assert await collection.pull_one({"_id": _id}, "members", "a") is False
    assert await collection.add_to_set_one({"_id": ObjectId()}, "members", "a") is False


@pytest.mark.asyncio
async def test_update_and_delete_report_matches():
    collection = InMemoryDocCollection("things")
    _id = await collection.create_one({"n": 1})
    await collection.create_one({"n": 1})

    assert await collection.partial_update_one({"_id": _id}, {"n": 2}) is True
    assert await collection.partial_update_one({"_id": ObjectId()}, {"n": 2}) is False
    assert await collection.count({"n": 1}) == 1
    assert await collection.delete_many({}) == 2
    assert await collection.delete_one({"_id": _id}) is False


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        CollectionFactory("sqlite")


@pytest.mark.asyncio
async def test_factory_tracks_memory_collections():
    factory = CollectionFactory("memory")
    factory.create("a")
    factory.create("b", [("x",)])

    await factory.initialize()

    assert [collection.name for collection in factory.collections] == ["a", "b"]


@pytest.mark.asyncio
async def test_keyed_lock_serializes_same_key_only():
    lock = KeyedLock()
    order = []

    async def worker(key, name):
        async with lock.hold(key):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(worker("k", "a"), worker("k", "b"), worker("other", "c"))

    assert order.index("a-out") < order.index("b-in")
    assert order.index("c-in") < order.index("a-out")
    assert len(lock) == 0
