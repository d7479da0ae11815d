"""
Task Tracker API - Task Router

CRUD endpoints for task management.
All endpoints are JWT-protected and user-scoped.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Request, Response, status

from tasktracker.auth.dependencies import CurrentUser
from tasktracker.tasks.service import TaskService
from tasktracker.tasks.repository import TaskRepositoryInterface
from tasktracker.tasks.schemas import TaskWriteRequest, TaskResponse


router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_repository(request: Request) -> TaskRepositoryInterface:
    """Dependency to get the task repository built at startup."""
    return request.app.state.task_repository


def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> List[TaskResponse]:
    """List the authenticated user's tasks, oldest first."""
    return await service.list_tasks(owner_id=current_user.id)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskWriteRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    The task is automatically associated with the current user.
    """
    return await service.create_task(
        owner_id=current_user.id,
        title=request.title,
        description=request.description,
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Get a specific task by ID.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    return await service.get_task(task_id, current_user.id)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
)
async def update_task(
    task_id: str,
    request: TaskWriteRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Replace a task's title and description.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    return await service.update_task(
        task_id,
        current_user.id,
        title=request.title,
        description=request.description,
    )


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    """
    Delete a task by ID.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    await service.delete_task(task_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
