"""
Task Tracker API - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid


def utcnow() -> datetime:
    """Current UTC time at MongoDB's millisecond precision, so stored and returned values match."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> "Task":
        """Create a new task with generated ID."""
        now = utcnow()
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create task from MongoDB document."""
        return cls(
            id=data["_id"],
            owner_id=data["owner_id"],
            title=data["title"],
            description=data.get("description"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
