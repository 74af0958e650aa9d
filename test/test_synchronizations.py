# test/test_synchronizations.py
import pytest
from bson import ObjectId

from socialapp.domain.concepts.communiting import CommunityAuthorNoMatchError, CommunityUserNoMatchError
from socialapp.domain.concepts.favoriting import FavoritingConcept
from socialapp.domain.concepts.feeding import FeedingConcept
from socialapp.domain.concepts.posting import PostNotFoundError
from socialapp.domain.concepts.sessioning import AlreadyLoggedInError, UnauthenticatedError


async def _sign_up(sync, username):
    await sync.create_user(None, username, "secret")
    return (await sync.log_in(None, username, "secret"))["token"]


@pytest.mark.asyncio
async def test_log_in_and_out(sync):
    token = await _sign_up(sync, "alice")

    assert (await sync.get_session_user(token))["username"] == "alice"
    with pytest.raises(AlreadyLoggedInError):
        await sync.log_in(token, "alice", "secret")

    await sync.log_out(token)
    with pytest.raises(UnauthenticatedError):
        await sync.get_session_user(token)


@pytest.mark.asyncio
async def test_posts_show_author_usernames(sync):
    token = await _sign_up(sync, "alice")
    await sync.create_post(token, "hello")

    posts = await sync.get_posts()
    assert [post["author"] for post in posts] == ["alice"]
    assert await sync.get_posts("alice") == posts


@pytest.mark.asyncio
async def test_delete_post_clears_favorites(sync, container):
    alice = await _sign_up(sync, "alice")
    bob = await _sign_up(sync, "bob")
    post = (await sync.create_post(alice, "hello"))["post"]["_id"]
    await sync.favorite_item(bob, post)

    await sync.delete_post(alice, post)

    favoriting = container.get(FavoritingConcept)
    assert await favoriting.get_num_favorites(post) == {"num_favorites": 0}


@pytest.mark.asyncio
async def test_favorite_requires_existing_post(sync):
    token = await _sign_up(sync, "alice")

    with pytest.raises(PostNotFoundError):
        await sync.favorite_item(token, ObjectId())


@pytest.mark.asyncio
async def test_community_items_require_membership(sync):
    alice = await _sign_up(sync, "alice")
    bob = await _sign_up(sync, "bob")
    community = (await sync.create_community(alice, "Hikers", "desc"))["community"]
    post = (await sync.create_post(bob, "trail report"))["post"]["_id"]

    with pytest.raises(CommunityUserNoMatchError):
        await sync.add_community_item(bob, community["_id"], post)

    await sync.join_community(bob, community["_id"])
    await sync.add_community_item(bob, community["_id"], post)

    items = await sync.get_community_items(community["_id"])
    assert [item["item"] for item in items] == [post]


@pytest.mark.asyncio
async def test_delete_community_cascades_to_feed(sync, container):
    alice = await _sign_up(sync, "alice")
    bob = await _sign_up(sync, "bob")
    community = (await sync.create_community(alice, "Hikers", "desc"))["community"]["_id"]
    post = (await sync.create_post(alice, "hello"))["post"]["_id"]
    await sync.add_community_item(alice, community, post)

    with pytest.raises(CommunityAuthorNoMatchError):
        await sync.delete_community(bob, community)

    await sync.delete_community(alice, community)

    assert await sync.get_communities("Hikers") is None
    assert await container.get(FeedingConcept).get_items(community) == []


@pytest.mark.asyncio
async def test_promotion_uses_favorite_count(sync, container):
    alice = await _sign_up(sync, "alice")
    post = (await sync.create_post(alice, "popular"))["post"]["_id"]
    favoriting = container.get(FavoritingConcept)

    result = await sync.promote_item(post)
    assert result["featured"] is False

    for _ in range(10):
        await favoriting.favorite(ObjectId(), post)

    assert (await sync.promote_item(post))["featured"] is True
    assert [doc["item"] for doc in await sync.get_featured()] == [post]


@pytest.mark.asyncio
async def test_delete_user_ends_sessions(sync):
    token = await _sign_up(sync, "alice")
    second = (await sync.log_in(None, "alice", "secret"))["token"]

    await sync.delete_user(token)

    with pytest.raises(UnauthenticatedError):
        await sync.get_session_user(second)


@pytest.mark.asyncio
async def test_delete_post_clears_feeds_and_features(sync, container):
    alice = await _sign_up(sync, "alice")
    community = (await sync.create_community(alice, "Hikers", "desc"))["community"]["_id"]
    post = (await sync.create_post(alice, "popular"))["post"]["_id"]
    await sync.add_community_item(alice, community, post)
    favoriting = container.get(FavoritingConcept)
    for _ in range(10):
        await favoriting.favorite(ObjectId(), post)
    await sync.promote_item(post)

    await sync.delete_post(alice, post)

    assert await sync.get_community_items(community) == []
    assert await sync.get_featured() == []
