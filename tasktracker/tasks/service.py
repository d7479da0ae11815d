"""
Task Tracker API - Task Service

Business rules for task operations. Every operation takes the owner from the
authenticated request, never from the request body.
"""

import logging
from typing import Optional, List

from tasktracker.errors import NotFoundError, ValidationError
from tasktracker.tasks.models import Task
from tasktracker.tasks.repository import TaskRepositoryInterface
from tasktracker.tasks.schemas import TaskResponse

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def _validate_title(title: Optional[str]) -> None:
    if title is None or not title.strip():
        raise ValidationError("Task title cannot be empty")


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        """Convert a Task model to its public representation."""
        return TaskResponse(
            id=task.id,
            owner=task.owner_id,
            title=task.title,
            description=task.description,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    async def create_task(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> TaskResponse:
        """Create a new task for the owner."""
        _validate_title(title)
        task = Task.create(owner_id=owner_id, title=title, description=description)
        await self.repository.create(task)
        logger.info(f"Created task id={task.id} for user id={owner_id}")
        return self._task_to_response(task)

    async def list_tasks(self, owner_id: str) -> List[TaskResponse]:
        """List the owner's tasks in creation order."""
        tasks = await self.repository.list_by_owner(owner_id)
        return [self._task_to_response(task) for task in tasks]

    async def get_task(self, task_id: str, owner_id: str) -> TaskResponse:
        """Get a task by ID, scoped to owner."""
        task = await self.repository.get_by_id(task_id, owner_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return self._task_to_response(task)

    async def update_task(
        self,
        task_id: str,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> TaskResponse:
        """
        Replace a task's title and description, scoped to owner.

        An omitted description clears the stored one.
        """
        _validate_title(title)
        task = await self.repository.update(
            task_id,
            owner_id,
            {"title": title, "description": description},
        )
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Updated task id={task_id} for user id={owner_id}")
        return self._task_to_response(task)

    async def delete_task(self, task_id: str, owner_id: str) -> None:
        """Delete a task, scoped to owner."""
        deleted = await self.repository.delete(task_id, owner_id)
        if not deleted:
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info(f"Deleted task id={task_id} for user id={owner_id}")
