
from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    """Get current UTC time, truncated to the millisecond MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def normalize_email(email: str) -> str:
    """Lookup key for case-insensitive email uniqueness."""
    return email.strip().lower()


@dataclass
class User:
    """User entity for authentication."""

    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def email_normalized(self) -> str:
        return normalize_email(self.email)

    @classmethod
    def create(cls, name: str, email: str, password_hash: str) -> "User":
        """Create a new user with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=_utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert user to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "email_normalized": self.email_normalized,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create user from MongoDB document."""
        return cls(
            id=data["_id"],
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=data["created_at"],
        )
