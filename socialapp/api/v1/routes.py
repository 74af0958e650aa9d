"""
Route Table
===========

Explicit (method, path, endpoint) table for the API.

``build_router`` turns the table into an APIRouter when the application is
created; nothing is registered through decorators.
"""
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, List, Optional

from fastapi import APIRouter, status

from socialapp.api.v1 import endpoints
from socialapp.application.dto.responses import (
    CommunityCreatedResponse,
    PostCreatedResponse,
    PostResponse,
    UserCreatedResponse,
    UserResponse,
)
from socialapp.utils.serialization import encode

Endpoint = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Endpoint
    status_code: int = status.HTTP_200_OK
    tags: Optional[List[str]] = None
    response_model: Any = None


ROUTE_TABLE: List[Route] = [
    # Sessions and accounts
    Route("GET", "/session", endpoints.get_session_user, tags=["users"], response_model=UserResponse),
    Route("GET", "/users", endpoints.get_users, tags=["users"], response_model=List[UserResponse]),
    Route("GET", "/users/{username}", endpoints.get_user, tags=["users"], response_model=UserResponse),
    Route("POST", "/users", endpoints.create_user, status.HTTP_201_CREATED, tags=["users"],
          response_model=UserCreatedResponse),
    Route("PATCH", "/users/username", endpoints.update_username, tags=["users"]),
    Route("PATCH", "/users/password", endpoints.update_password, tags=["users"]),
    Route("DELETE", "/users", endpoints.delete_user, tags=["users"]),
    Route("POST", "/login", endpoints.log_in, tags=["users"]),
    Route("POST", "/logout", endpoints.log_out, tags=["users"]),
    # Posts
    Route("GET", "/posts", endpoints.get_posts, tags=["posts"], response_model=List[PostResponse]),
    Route("POST", "/posts", endpoints.create_post, status.HTTP_201_CREATED, tags=["posts"],
          response_model=PostCreatedResponse),
    Route("PATCH", "/posts/{id}", endpoints.update_post, tags=["posts"]),
    Route("DELETE", "/posts/{id}", endpoints.delete_post, tags=["posts"]),
    # Friends
    Route("GET", "/friends", endpoints.get_friends, tags=["friends"]),
    Route("DELETE", "/friends/{friend}", endpoints.remove_friend, tags=["friends"]),
    Route("GET", "/friend/requests", endpoints.get_friend_requests, tags=["friends"]),
    Route("POST", "/friend/requests/{to}", endpoints.send_friend_request, tags=["friends"]),
    Route("DELETE", "/friend/requests/{to}", endpoints.remove_friend_request, tags=["friends"]),
    Route("PUT", "/friend/accept/{sender}", endpoints.accept_friend_request, tags=["friends"]),
    Route("PUT", "/friend/reject/{sender}", endpoints.reject_friend_request, tags=["friends"]),
    # Communities and their feeds
    Route("POST", "/communities", endpoints.create_community, status.HTTP_201_CREATED, tags=["communities"],
          response_model=CommunityCreatedResponse),
    Route("GET", "/communities", endpoints.get_communities, tags=["communities"]),
    Route("DELETE", "/communities/{id}", endpoints.delete_community, tags=["communities"]),
    Route("PATCH", "/communities/{id}/join", endpoints.join_community, tags=["communities"]),
    Route("PATCH", "/communities/{id}/leave", endpoints.leave_community, tags=["communities"]),
    Route("GET", "/communities/{id}/members", endpoints.get_num_members, tags=["communities"]),
    Route("GET", "/communities/{id}/items", endpoints.get_community_items, tags=["communities"]),
    Route("POST", "/communities/{id}/items", endpoints.add_community_item, status.HTTP_201_CREATED, tags=["communities"]),
    Route("DELETE", "/communities/{id}/items/{item}", endpoints.delete_community_item, tags=["communities"]),
    # Favorites
    Route("POST", "/posts/{id}/favorites", endpoints.favorite_item, status.HTTP_201_CREATED, tags=["favorites"]),
    Route("DELETE", "/posts/{id}/favorites", endpoints.unfavorite_item, tags=["favorites"]),
    Route("GET", "/posts/{id}/favorites", endpoints.get_num_favorites, tags=["favorites"]),
    Route("GET", "/users/{username}/favorites", endpoints.get_user_favorites, tags=["favorites"]),
    # Featuring
    Route("GET", "/featured", endpoints.get_featured, tags=["featured"]),
    Route("POST", "/featured", endpoints.promote_item, tags=["featured"]),
    Route("DELETE", "/featured/{item}", endpoints.depromote_item, tags=["featured"]),
]


def _encoded(endpoint: Endpoint) -> Endpoint:
    """Wrap an endpoint so ObjectIds and datetimes in its result become JSON."""
    @functools.wraps(endpoint)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return encode(await endpoint(*args, **kwargs))
    return wrapper


def build_router(routes: Iterable[Route] = ROUTE_TABLE) -> APIRouter:
    """
    Build an APIRouter from a route table.

    Args:
        routes: Route entries, registered in order

    Returns:
        APIRouter with one route per entry
    """
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            _encoded(route.endpoint),
            methods=[route.method],
            status_code=route.status_code,
            tags=route.tags,
            response_model=route.response_model,
            name=route.endpoint.__name__,
        )
    return router
