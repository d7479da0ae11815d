"""
Task Tracker API - Credential Store

User persistence behind a repository interface, with MongoDB and in-memory
implementations. Emails are unique case-insensitively.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from tasktracker.auth.models import User, normalize_email
from tasktracker.errors import ConflictError, InternalError

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    """

    @abstractmethod
    async def register(self, name: str, email: str, password_hash: str) -> User:
        """Persist a new user. Raises ConflictError if the email is taken."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive), including the password hash."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        """Unique index backing case-insensitive email uniqueness."""
        await self.collection.create_index("email_normalized", unique=True)

    async def register(self, name: str, email: str, password_hash: str) -> User:
        user = User.create(name=name, email=email, password_hash=password_hash)
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError:
            raise ConflictError("Email already registered")
        except PyMongoError as e:
            logger.error(f"[MongoUserRepository] Error creating user {user.id}: {e}", exc_info=True)
            raise InternalError() from e
        logger.info(f"[MongoUserRepository] Created user id={user.id}")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email_normalized": normalize_email(email)})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.from_dict(doc)


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for tests and local development."""

    def __init__(self):
        self._users: dict[str, User] = {}
        self._users_by_email: dict[str, User] = {}

    def clear(self) -> None:
        self._users.clear()
        self._users_by_email.clear()

    async def register(self, name: str, email: str, password_hash: str) -> User:
        key = normalize_email(email)
        if key in self._users_by_email:
            raise ConflictError("Email already registered")
        user = User.create(name=name, email=email, password_hash=password_hash)
        self._users[user.id] = user
        self._users_by_email[key] = user
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        return self._users_by_email.get(normalize_email(email))

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)
