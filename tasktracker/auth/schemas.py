"""
Task Tracker API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from tasktracker.auth.passwords import BCRYPT_MAX_PASSWORD_BYTES


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class UserResponse(BaseModel):
    """Public user information response."""

    id: str
    name: str
    email: str
    created_at: datetime


class TokenResponse(BaseModel):
    """Response schema for successful authentication."""

    token: str
    token_type: str = "bearer"
