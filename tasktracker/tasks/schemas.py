"""
Task Tracker API - Task Schemas

Pydantic models for task API requests and responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskWriteRequest(BaseModel):
    """Request model for creating or replacing a task.

    Blank titles pass the schema and are rejected by the service.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=500, description="Task title")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    owner: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
