from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasktracker.auth.models import User
from tasktracker.auth.passwords import PasswordHasher
from tasktracker.auth.repository import UserRepositoryInterface
from tasktracker.auth.service import AuthService
from tasktracker.auth.tokens import TokenService
from tasktracker.errors import AuthError


# HTTP Bearer token scheme - auto_error=False to handle missing tokens ourselves
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_repository(request: Request) -> UserRepositoryInterface:
    """Dependency to get the user repository built at startup."""
    return request.app.state.user_repository


def get_password_hasher(request: Request) -> PasswordHasher:
    """Dependency to get the password hasher built from the app config."""
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    """Dependency to get the token service built from the app config."""
    return request.app.state.token_service


def get_auth_service(
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(repository, hasher, tokens)


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
) -> User:
    """
    Resolve the authenticated user from the bearer token.

    Every failure (no header, wrong scheme, bad or expired token, user gone)
    raises the same AuthError before the route handler runs.
    """
    if credentials is None:
        raise AuthError()

    user_id = tokens.verify(credentials.credentials)

    user = await repository.get_by_id(user_id)
    if user is None:
        raise AuthError()

    request.state.user_id = user.id
    return user


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
