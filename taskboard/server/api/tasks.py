"""
Task Endpoints.

All routes require a bearer token and only ever touch the caller's own
tasks. Updating or deleting a task that belongs to someone else answers 404,
exactly as if the task did not exist.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from taskboard.core.database.repositories.tasks import TaskChanges, TaskRepository
from taskboard.core.logging_config import get_logger
from taskboard.core.models.io.tasks import TaskCreate, TaskFilter, TaskRead, TaskUpdate
from taskboard.server.services.deps import CurrentUserDep, SessionDep

logger = get_logger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=TaskRead,
    summary="Create Task",
    description="Create a task owned by the caller. Status starts as 'Pending'.",
)
async def create_task(body: TaskCreate, user_id: CurrentUserDep, session: SessionDep) -> TaskRead:
    task = await TaskRepository(session).create(
        user_id=user_id,
        title=body.title,
        description=body.description,
        priority=body.priority,
        deadline=body.deadline,
    )
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List Tasks",
    description="List the caller's tasks, optionally filtered by status, priority and a search term.",
)
async def list_tasks(
    filters: Annotated[TaskFilter, Query()],
    user_id: CurrentUserDep,
    session: SessionDep,
) -> list[TaskRead]:
    """
    List tasks.

    Filters combine with AND; any filter left out does not restrict the result.

    - **status**: Exact status match.
    - **priority**: Exact priority match.
    - **search**: Case-insensitive substring of the title or the description.
    """
    tasks = await TaskRepository(session).list_for_owner(
        user_id,
        status=filters.status,
        priority=filters.priority,
        search=filters.search,
    )
    return [TaskRead.model_validate(task) for task in tasks]


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update Task",
    description="Partially update one of the caller's tasks. Fields left out keep their stored value.",
    responses={404: {"description": "No task with this id belongs to the caller"}},
)
async def update_task(task_id: int, body: TaskUpdate, user_id: CurrentUserDep, session: SessionDep) -> TaskRead:
    changes = TaskChanges(
        title=body.title,
        description=body.description,
        priority=body.priority,
        status=body.status,
        deadline=body.deadline,
    )
    task = await TaskRepository(session).update_for_owner(task_id, user_id, changes)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    summary="Delete Task",
    responses={404: {"description": "No task with this id belongs to the caller"}},
)
async def delete_task(task_id: int, user_id: CurrentUserDep, session: SessionDep) -> dict:
    await TaskRepository(session).delete_for_owner(task_id, user_id)
    logger.info(f"User {user_id} deleted task {task_id}")
    return {"message": "Task deleted successfully"}
