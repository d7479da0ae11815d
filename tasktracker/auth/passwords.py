import uuid

import bcrypt

from tasktracker.errors import InternalError

# bcrypt only consumes the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with constant-time verification."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # A hash no password matches, for equal-cost checks on unknown accounts
        self.dummy_hash = self.hash(uuid.uuid4().hex)

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt with a fresh salt."""
        password_bytes = password.encode("utf-8")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(password_bytes, salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise InternalError("Password hashing failed") from e

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")
        # Registration never accepts such a password, so it cannot match
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            raise InternalError("Password verification failed") from e
