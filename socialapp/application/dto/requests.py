"""
Request DTOs
============

Pydantic models for API request bodies.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """DTO for account creation and login."""
    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(..., min_length=1, description="Plain-text password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "alice", "password": "correct horse"}}
    )


class UsernameUpdateRequest(BaseModel):
    username: str = Field(..., min_length=1)


class PasswordUpdateRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class PostOptionsModel(BaseModel):
    """Optional presentation settings of a post."""
    background_color: Optional[str] = Field(None, description="CSS color behind the post")


class PostCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    options: Optional[PostOptionsModel] = None


class PostUpdateRequest(BaseModel):
    content: Optional[str] = None
    options: Optional[PostOptionsModel] = None


class CommunityCreateRequest(BaseModel):
    """DTO for creating a community."""
    title: str = Field(..., min_length=1, description="Globally unique community title")
    description: str = Field("", description="Free-form description")

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Hikers", "description": "Weekend trail walks"}}
    )


class CommunityItemRequest(BaseModel):
    item: str = Field(..., description="Id of the post to add to the community feed")


class FeatureRequest(BaseModel):
    item: str = Field(..., description="Id of the post to promote")
