"""
Task Tracker API - Authentication Router

Endpoints for user registration, login, and current user info.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tasktracker.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    UserResponse,
    TokenResponse,
)
from tasktracker.auth.models import User
from tasktracker.auth.service import AuthService
from tasktracker.auth.dependencies import CurrentUser, get_auth_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """
    Register a new user with name, email and password.

    - Email must be unique (case-insensitive); duplicates return 409
    - Password must be at least 6 characters
    """
    user = await auth_service.register_user(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return _user_to_response(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and get access token",
)
async def login(
    request: UserLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate user and return JWT access token.

    Use the returned token in the Authorization header:
    `Authorization: Bearer <token>`
    """
    user = await auth_service.authenticate_user(
        email=request.email,
        password=request.password,
    )
    return TokenResponse(token=auth_service.create_access_token(user_id=user.id))


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user info",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's public information."""
    return _user_to_response(current_user)
