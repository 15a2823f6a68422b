"""
Task repository and query builder.

Every statement issued here is scoped to the acting user: reads filter on
``tasks.user_id`` first, and updates and deletes match on both ``task_id`` and
``user_id`` in a single statement. A task owned by someone else is therefore
indistinguishable from a task that does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from sqlalchemy import and_, bindparam, delete, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import BindParameter, ColumnElement
from sqlmodel import select

from taskboard.core.errors import TaskNotFound
from taskboard.core.logging_config import get_logger

from ..entities.tasks import COMPLETED_STATUS, Task
from ..utils import to_naive_utc, utc_now_naive
from .base import AsyncBaseRepository

logger = get_logger(__name__)

PredicateTemplate = Callable[[BindParameter], ColumnElement[bool]]

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` is matched as a literal substring."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class TaskQueryBuilder:
    """Builds one parameterized query over a single user's tasks.

    The builder keeps an ordered list of ``(name, predicate-template, value)``
    entries. A template receives a bound parameter, never the raw value, so
    user input only ever reaches the datastore as a bound parameter. The owner
    predicate is always the first entry; every other entry is optional and
    all of them are combined with AND.

    Example:
        ```python
        stmt = TaskQueryBuilder(user_id).with_status("Pending").with_search("report").build()
        ```
    """

    def __init__(self, user_id: int) -> None:
        self._entries: List[Tuple[str, PredicateTemplate, Any]] = [
            ("owner_id", lambda p: Task.user_id == p, user_id),
        ]

    def _add(self, name: str, template: PredicateTemplate, value: Any) -> "TaskQueryBuilder":
        self._entries.append((name, template, value))
        return self

    def with_status(self, status: Optional[str]) -> "TaskQueryBuilder":
        """Exact match on status; empty values are ignored."""
        if status:
            self._add("status", lambda p: Task.status == p, status)
        return self

    def with_priority(self, priority: Optional[str]) -> "TaskQueryBuilder":
        """Exact match on priority; empty values are ignored."""
        if priority:
            self._add("priority", lambda p: Task.priority == p, priority)
        return self

    def with_search(self, search: Optional[str]) -> "TaskQueryBuilder":
        """Case-insensitive substring match on title OR description."""
        if search:
            self._add(
                "search",
                lambda p: or_(
                    Task.title.ilike(p, escape=LIKE_ESCAPE),
                    Task.description.ilike(p, escape=LIKE_ESCAPE),
                ),
                f"%{_escape_like(search)}%",
            )
        return self

    def overdue(self, now: datetime) -> "TaskQueryBuilder":
        """Tasks whose deadline is strictly before ``now`` and are not completed."""
        self._add("now", lambda p: Task.deadline < p, now)
        self._add("completed_status", lambda p: Task.status != p, COMPLETED_STATUS)
        return self

    @property
    def parameters(self) -> dict[str, Any]:
        """Bound values keyed by parameter name."""
        return {name: value for name, _, value in self._entries}

    def predicates(self) -> List[ColumnElement[bool]]:
        """Render every template against its own bound parameter, owner first."""
        return [template(bindparam(name, value=value)) for name, template, value in self._entries]

    def build(self):
        """Return ``SELECT * FROM tasks WHERE <predicates>``."""
        return select(Task).where(and_(*self.predicates()))

    def build_count(self):
        """Return ``SELECT count(*) FROM tasks WHERE <predicates>``."""
        return select(func.count()).select_from(Task).where(and_(*self.predicates()))


@dataclass(frozen=True)
class TaskChanges:
    """Partial update of a task. ``None`` means keep the stored value."""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[datetime] = None


class TaskRepository(AsyncBaseRepository[Task]):
    """Owner-scoped task operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def create(
        self,
        *,
        user_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        priority: Optional[str] = None,
        deadline: Optional[datetime] = None,
    ) -> Task:
        """Insert a task owned by ``user_id``.

        A missing title is left for the datastore's NOT NULL constraint to reject.

        Raises:
            Conflict: If the datastore rejects the row
        """
        task = Task(
            user_id=user_id,
            title=title,
            description=description,
            priority=priority,
            deadline=to_naive_utc(deadline),
        )
        return await self._insert(task)

    async def list_for_owner(
        self,
        user_id: int,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        """List the owner's tasks matching every supplied filter."""
        builder = TaskQueryBuilder(user_id).with_status(status).with_priority(priority).with_search(search)
        result = await self.session.execute(builder.build())
        tasks = list(result.scalars().all())
        logger.debug(
            f"Retrieved {len(tasks)} tasks (user_id={user_id}, status={status}, "
            f"priority={priority}, search={search})"
        )
        return tasks

    async def update_for_owner(self, task_id: int, user_id: int, changes: TaskChanges) -> Task:
        """Apply a partial update in one ``UPDATE ... RETURNING`` statement.

        Each column is set to ``COALESCE(:value, column)`` so absent fields keep
        their stored value; ``updated_at`` is always re-stamped.

        Raises:
            TaskNotFound: If no task matches both ``task_id`` and ``user_id``
        """
        table = Task.__table__
        values: dict[str, Any] = {}
        for field in fields(changes):
            value = getattr(changes, field.name)
            if field.name == "deadline":
                value = to_naive_utc(value)
            column = table.c[field.name]
            values[field.name] = func.coalesce(bindparam(None, value=value, type_=column.type), column)
        values["updated_at"] = utc_now_naive()

        stmt = (
            update(Task)
            .where(Task.task_id == task_id, Task.user_id == user_id)
            .values(**values)
            .returning(Task)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await self.session.execute(stmt)
        task = result.scalars().first()
        if task is None:
            raise TaskNotFound()
        await self.session.commit()
        return task

    async def delete_for_owner(self, task_id: int, user_id: int) -> None:
        """Delete in one ``DELETE ... RETURNING`` statement.

        Raises:
            TaskNotFound: If no task matches both ``task_id`` and ``user_id``
        """
        stmt = delete(Task).where(Task.task_id == task_id, Task.user_id == user_id).returning(Task.task_id)
        result = await self.session.execute(stmt)
        deleted = result.first()
        if deleted is None:
            raise TaskNotFound()
        await self.session.commit()
