import logging
from datetime import timedelta
from typing import Optional

from starlette.concurrency import run_in_threadpool

from tasktracker.auth.models import User
from tasktracker.auth.passwords import PasswordHasher
from tasktracker.auth.repository import UserRepositoryInterface
from tasktracker.auth.tokens import TokenService
from tasktracker.errors import AuthError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Registration, login and token operations over the credential store."""

    def __init__(
        self,
        repository: UserRepositoryInterface,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.repository = repository
        self.hasher = hasher
        self.tokens = tokens

    async def register_user(self, name: str, email: str, password: str) -> User:
        """Register a new user. Raises ConflictError if the email exists."""
        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(self.hasher.hash, password)
        user = await self.repository.register(name=name, email=email, password_hash=password_hash)
        logger.info(f"Registered user id={user.id}")
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user by email and password.

        Unknown email and wrong password raise the same AuthError, and both
        paths pay for one bcrypt check.
        """
        user = await self.repository.find_by_email(email)
        if user is None:
            await run_in_threadpool(self.hasher.verify, password, self.hasher.dummy_hash)
            logger.info("Login failed")
            raise AuthError(INVALID_CREDENTIALS)

        if not await run_in_threadpool(self.hasher.verify, password, user.password_hash):
            logger.info("Login failed")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"Login succeeded for user id={user.id}")
        return user

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        return self.tokens.issue(user_id, expires_delta=expires_delta)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.repository.get_by_id(user_id)
