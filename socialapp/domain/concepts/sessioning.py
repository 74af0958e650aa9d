"""
Sessioning Concept
==================

concept: Sessioning [User]

Maps opaque session tokens to users. The transport layer stores the token
(a cookie); this concept only knows tokens and user ids.
"""
import logging
import secrets
from typing import Optional

from bson import ObjectId

from socialapp.domain.constants.session_fields import SessionFields
from socialapp.domain.errors import NotAllowedError
from socialapp.domain.repositories.doc_collection import DocCollection

logger = logging.getLogger(__name__)


class UnauthenticatedError(NotAllowedError):
    kind = "Unauthenticated"

    def __init__(self) -> None:
        super().__init__("Must be logged in!")


class AlreadyLoggedInError(NotAllowedError):
    kind = "AlreadyLoggedIn"

    def __init__(self) -> None:
        super().__init__("Must be logged out!")


class SessioningConcept:

    UNIQUE_KEYS = [(SessionFields.TOKEN,)]

    def __init__(self, sessions: DocCollection) -> None:
        self.sessions = sessions

    async def start(self, user: ObjectId) -> str:
        token = secrets.token_urlsafe(32)
        await self.sessions.create_one({SessionFields.TOKEN: token, SessionFields.USER: user})
        logger.debug("Session started for %s", user)
        return token

    async def end(self, token: Optional[str]) -> None:
        await self.get_user(token)
        await self.sessions.delete_one({SessionFields.TOKEN: token})

    async def end_all(self, user: ObjectId) -> int:
        """End every session of a user (account deletion)."""
        return await self.sessions.delete_many({SessionFields.USER: user})

    async def get_user(self, token: Optional[str]) -> ObjectId:
        if not token:
            raise UnauthenticatedError()
        session = await self.sessions.read_one({SessionFields.TOKEN: token})
        if session is None:
            raise UnauthenticatedError()
        return session[SessionFields.USER]

    async def is_logged_out(self, token: Optional[str]) -> None:
        if token and await self.sessions.read_one({SessionFields.TOKEN: token}) is not None:
            raise AlreadyLoggedInError()
