"""
Authing Concept
===============

concept: Authenticating

User accounts with unique usernames and argon2-hashed passwords.
Documents handed out by this concept never contain the password hash.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError
from bson import ObjectId

from socialapp.domain.constants.doc_fields import DocFields
from socialapp.domain.constants.user_fields import UserFields
from socialapp.domain.errors import NotAllowedError, NotFoundError
from socialapp.domain.models.documents import UserDoc
from socialapp.domain.repositories.doc_collection import DocCollection, DuplicateDocumentError

logger = logging.getLogger(__name__)

DELETED_USER = "DELETED_USER"


class UserNotFoundError(NotFoundError):
    kind = "UserNotFound"

    def __init__(self, user: Any) -> None:
        super().__init__("User {0} not found!", user)
        self.user = user


class UsernameTakenError(NotAllowedError):
    kind = "UsernameTaken"

    def __init__(self, username: str) -> None:
        super().__init__("User with username {0} already exists!", username)
        self.username = username


class InvalidCredentialsError(NotAllowedError):
    kind = "InvalidCredentials"

    def __init__(self) -> None:
        super().__init__("Username or password is incorrect.")


class InvalidUserInputError(NotAllowedError):
    kind = "InvalidUserInput"

    def __init__(self, detail: str) -> None:
        super().__init__("{0}", detail)
        self.detail = detail


def redact(user: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a user document without the password hash."""
    return {key: value for key, value in user.items() if key != UserFields.PASSWORD}


class AuthingConcept:

    UNIQUE_KEYS = [(UserFields.USERNAME,)]

    def __init__(self, users: DocCollection, hasher: Optional[PasswordHasher] = None) -> None:
        self.users = users
        self._hasher = hasher or PasswordHasher()

    async def create(self, username: str, password: str) -> Dict[str, Any]:
        if not username or not password:
            raise InvalidUserInputError("Username and password must be non-empty!")
        await self.assert_username_unique(username)

        try:
            _id = await self.users.create_one({
                UserFields.USERNAME: username,
                UserFields.PASSWORD: self._hasher.hash(password),
            })
        except DuplicateDocumentError as e:
            raise UsernameTakenError(username) from e

        logger.debug("User %s created", _id)
        return {"msg": "User created successfully!", "user": await self.get_user_by_id(_id)}

    async def get_user_by_id(self, _id: ObjectId) -> UserDoc:
        user = await self.users.read_one({DocFields.ID: _id})
        if user is None:
            raise UserNotFoundError(_id)
        return redact(user)

    async def get_user_by_username(self, username: str) -> UserDoc:
        user = await self.users.read_one({UserFields.USERNAME: username})
        if user is None:
            raise UserNotFoundError(username)
        return redact(user)

    async def get_users(self) -> List[UserDoc]:
        users = await self.users.read_many({}, sort=[(UserFields.USERNAME, 1)])
        return [redact(user) for user in users]

    async def ids_to_usernames(self, ids: Sequence[ObjectId]) -> List[str]:
        """Usernames in the order of ``ids``; unknown ids map to DELETED_USER."""
        users = await self.users.read_many({DocFields.ID: {"$in": list(ids)}})
        by_id = {user[DocFields.ID]: user[UserFields.USERNAME] for user in users}
        return [by_id.get(_id, DELETED_USER) for _id in ids]

    async def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        user = await self.users.read_one({UserFields.USERNAME: username})
        if user is None:
            raise InvalidCredentialsError()
        try:
            self._hasher.verify(user[UserFields.PASSWORD], password)
        except VerifyMismatchError as e:
            raise InvalidCredentialsError() from e
        return {"msg": "Successfully authenticated.", "_id": user[DocFields.ID]}

    async def update_username(self, _id: ObjectId, username: str) -> Dict[str, Any]:
        if not username:
            raise InvalidUserInputError("Username must be non-empty!")
        await self.assert_username_unique(username)

        try:
            matched = await self.users.partial_update_one({DocFields.ID: _id}, {UserFields.USERNAME: username})
        except DuplicateDocumentError as e:
            raise UsernameTakenError(username) from e
        if not matched:
            raise UserNotFoundError(_id)
        return {"msg": "Username updated successfully!"}

    async def update_password(self, _id: ObjectId, current_password: str, new_password: str) -> Dict[str, Any]:
        user = await self.users.read_one({DocFields.ID: _id})
        if user is None:
            raise UserNotFoundError(_id)
        try:
            self._hasher.verify(user[UserFields.PASSWORD], current_password)
        except VerifyMismatchError as e:
            raise NotAllowedError("The given current password is wrong!") from e

        await self.users.partial_update_one(
            {DocFields.ID: _id},
            {UserFields.PASSWORD: self._hasher.hash(new_password)},
        )
        return {"msg": "Password updated successfully!"}

    async def delete(self, _id: ObjectId) -> Dict[str, Any]:
        if not await self.users.delete_one({DocFields.ID: _id}):
            raise UserNotFoundError(_id)
        logger.debug("User %s deleted", _id)
        return {"msg": "User deleted!"}

    async def assert_username_unique(self, username: str) -> None:
        if await self.users.read_one({UserFields.USERNAME: username}) is not None:
            raise UsernameTakenError(username)
