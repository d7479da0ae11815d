from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from tasktracker.errors import AuthError


class TokenService:
    """Issues and verifies signed, time-limited JWT access tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token for the user."""
        if expires_delta is None:
            expires_delta = self.expires_delta

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Decode and validate a JWT token. Returns the user id it was issued for."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            raise AuthError() from e

        # jose accepts a token whose exp equals the current second; treat it as expired
        if payload["exp"] <= datetime.now(timezone.utc).timestamp():
            raise AuthError()

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise AuthError()
        return user_id
