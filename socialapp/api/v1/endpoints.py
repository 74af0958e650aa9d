"""
Endpoints
=========

FastAPI-facing adapters for the synchronizations.

Each endpoint extracts the caller's session token, path/query values and
the validated request body, converts ids, and delegates to one
``Synchronizations`` method. Routing lives in ``routes.py``.
"""
from typing import Optional

from fastapi import Depends, Response

from socialapp.api.v1.dependencies import (
    get_app_settings,
    get_session_token,
    get_synchronizations,
    parse_object_id,
)
from socialapp.application.dto.requests import (
    CommunityCreateRequest,
    CommunityItemRequest,
    CredentialsRequest,
    FeatureRequest,
    PasswordUpdateRequest,
    PostCreateRequest,
    PostUpdateRequest,
    UsernameUpdateRequest,
)
from socialapp.application.synchronizations import Synchronizations
from socialapp.core.config import Settings

Session = Optional[str]


def _options(body) -> Optional[dict]:
    return body.options.model_dump(exclude_none=True) if body.options is not None else None


# ----------------------------------------------------------------------
# Sessions and accounts
# ----------------------------------------------------------------------

async def get_session_user(
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    """Current user."""
    return await sync.get_session_user(session)


async def get_users(sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_users()


async def get_user(username: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_user(username)


async def create_user(
    body: CredentialsRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.create_user(session, body.username, body.password)


async def update_username(
    body: UsernameUpdateRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.update_username(session, body.username)


async def update_password(
    body: PasswordUpdateRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.update_password(session, body.current_password, body.new_password)


async def delete_user(
    response: Response,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
    settings: Settings = Depends(get_app_settings),
):
    result = await sync.delete_user(session)
    response.delete_cookie(settings.session_cookie_name)
    return result


async def log_in(
    body: CredentialsRequest,
    response: Response,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
    settings: Settings = Depends(get_app_settings),
):
    """Authenticate and store the new session token in a cookie."""
    result = await sync.log_in(session, body.username, body.password)
    response.set_cookie(settings.session_cookie_name, result.pop("token"), httponly=True, samesite="lax")
    return result


async def log_out(
    response: Response,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
    settings: Settings = Depends(get_app_settings),
):
    result = await sync.log_out(session)
    response.delete_cookie(settings.session_cookie_name)
    return result


# ----------------------------------------------------------------------
# Posts
# ----------------------------------------------------------------------

async def get_posts(author: Optional[str] = None, sync: Synchronizations = Depends(get_synchronizations)):
    """All posts, newest first, optionally only those of ``author`` (a username)."""
    return await sync.get_posts(author)


async def create_post(
    body: PostCreateRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.create_post(session, body.content, _options(body))


async def update_post(
    id: str,
    body: PostUpdateRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.update_post(session, parse_object_id(id, "post id"), body.content, _options(body))


async def delete_post(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.delete_post(session, parse_object_id(id, "post id"))


# ----------------------------------------------------------------------
# Friends
# ----------------------------------------------------------------------

async def get_friends(
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.get_friends(session)


async def remove_friend(
    friend: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.remove_friend(session, friend)


async def get_friend_requests(
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.get_requests(session)


async def send_friend_request(
    to: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.send_friend_request(session, to)


async def remove_friend_request(
    to: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.remove_friend_request(session, to)


async def accept_friend_request(
    sender: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.accept_friend_request(session, sender)


async def reject_friend_request(
    sender: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.reject_friend_request(session, sender)


# ----------------------------------------------------------------------
# Communities
# ----------------------------------------------------------------------

async def create_community(
    body: CommunityCreateRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.create_community(session, body.title, body.description)


async def get_communities(title: Optional[str] = None, sync: Synchronizations = Depends(get_synchronizations)):
    """All communities, or the one with ``title`` (null if none)."""
    return await sync.get_communities(title)


async def delete_community(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.delete_community(session, parse_object_id(id, "community id"))


async def join_community(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.join_community(session, parse_object_id(id, "community id"))


async def leave_community(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.leave_community(session, parse_object_id(id, "community id"))


async def get_num_members(id: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_num_members(parse_object_id(id, "community id"))


async def get_community_items(id: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_community_items(parse_object_id(id, "community id"))


async def add_community_item(
    id: str,
    body: CommunityItemRequest,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.add_community_item(
        session,
        parse_object_id(id, "community id"),
        parse_object_id(body.item, "item id"),
    )


async def delete_community_item(
    id: str,
    item: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.delete_community_item(
        session,
        parse_object_id(id, "community id"),
        parse_object_id(item, "item id"),
    )


# ----------------------------------------------------------------------
# Favorites and featuring
# ----------------------------------------------------------------------

async def favorite_item(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.favorite_item(session, parse_object_id(id, "post id"))


async def unfavorite_item(
    id: str,
    session: Session = Depends(get_session_token),
    sync: Synchronizations = Depends(get_synchronizations),
):
    return await sync.unfavorite_item(session, parse_object_id(id, "post id"))


async def get_num_favorites(id: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_num_favorites(parse_object_id(id, "post id"))


async def get_user_favorites(username: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_favorites(username)


async def get_featured(sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.get_featured()


async def promote_item(body: FeatureRequest, sync: Synchronizations = Depends(get_synchronizations)):
    """Feature a post if enough users favorited it."""
    return await sync.promote_item(parse_object_id(body.item, "item id"))


async def depromote_item(item: str, sync: Synchronizations = Depends(get_synchronizations)):
    return await sync.depromote_item(parse_object_id(item, "item id"))


async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
