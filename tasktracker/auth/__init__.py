"""
Task Tracker API - Authentication Module

Register/login with bcrypt password hashing and JWT bearer tokens.
"""

from tasktracker.auth.router import router as auth_router
from tasktracker.auth.dependencies import get_current_user

__all__ = ["auth_router", "get_current_user"]
