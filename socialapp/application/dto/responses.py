"""
Response DTOs
=============

Pydantic models for the main documents returned by the API.

Ids are sent as hex strings under ``_id``; author fields already hold
usernames (see ``socialapp.application.responses``).
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Fields every stored document carries."""
    id: str = Field(..., alias="_id")
    date_created: datetime
    date_updated: datetime

    model_config = ConfigDict(populate_by_name=True)


class UserResponse(DocumentResponse):
    """DTO for account data. The password hash is never part of it."""
    username: str

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "6928422b8c9933d948cfdc21",
                "username": "alice",
                "date_created": "2026-10-19T09:11:50Z",
                "date_updated": "2026-10-19T09:11:50Z",
            }
        },
    )


class PostOptionsResponse(BaseModel):
    background_color: Optional[str] = None


class PostResponse(DocumentResponse):
    """DTO for post data; ``author`` is a username."""
    author: str
    content: str
    options: PostOptionsResponse = Field(default_factory=PostOptionsResponse)


class CommunityResponse(DocumentResponse):
    """DTO for community data; ``author`` is a username, ``members`` are user ids."""
    author: str
    title: str
    description: str
    members: List[str]

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "6928422b8c9933d948cfdc22",
                "author": "alice",
                "title": "Hikers",
                "description": "Weekend trail walks",
                "members": ["6928422b8c9933d948cfdc21"],
                "date_created": "2026-10-19T09:11:50Z",
                "date_updated": "2026-10-19T09:11:50Z",
            }
        },
    )


class PostCreatedResponse(BaseModel):
    msg: str
    post: PostResponse


class CommunityCreatedResponse(BaseModel):
    msg: str
    community: CommunityResponse


class UserCreatedResponse(BaseModel):
    msg: str
    user: UserResponse
