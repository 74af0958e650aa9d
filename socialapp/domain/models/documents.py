"""
Document Models
===============

Shapes of the documents each concept stores.
These are plain dicts at runtime; the TypedDicts document the keys.
"""
from datetime import datetime
from typing import List, TypedDict

from bson import ObjectId

BaseDoc = TypedDict("BaseDoc", {"_id": ObjectId, "date_created": datetime, "date_updated": datetime})


class UserDoc(BaseDoc):
    username: str
    password: str


class SessionDoc(BaseDoc):
    token: str
    user: ObjectId


class PostOptions(TypedDict, total=False):
    background_color: str


class PostDoc(BaseDoc):
    author: ObjectId
    content: str
    options: PostOptions


FriendRequestDoc = TypedDict(
    "FriendRequestDoc",
    {
        "_id": ObjectId,
        "date_created": datetime,
        "date_updated": datetime,
        "from": ObjectId,
        "to": ObjectId,
        "status": str,
    },
)


class FriendshipDoc(BaseDoc):
    user1: ObjectId
    user2: ObjectId
    pair: str


class CommunityDoc(BaseDoc):
    author: ObjectId
    title: str
    description: str
    members: List[ObjectId]


class FeedDoc(BaseDoc):
    feed: ObjectId
    item: ObjectId


class FavoriteDoc(BaseDoc):
    user: ObjectId
    item: ObjectId


class FeatureDoc(BaseDoc):
    item: ObjectId
