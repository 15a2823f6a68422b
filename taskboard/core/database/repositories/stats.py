"""
Dashboard statistics repository.

The five counts behind the dashboard are independent reads. They are issued
concurrently, each on its own pooled session, and joined once all of them
have completed. If any one fails the whole aggregation fails and the other
counts are discarded.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.core.logging_config import get_logger

from ..entities.tasks import COMPLETED_STATUS, DEFAULT_STATUS, HIGH_PRIORITY
from ..utils import utc_now_naive
from .tasks import TaskQueryBuilder

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskStats:
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    high_priority_tasks: int
    overdue_tasks: int


class StatsRepository:
    """Aggregates per-user task counts.

    Unlike the other repositories this one is bound to a session factory
    rather than a session: a single session cannot run statements
    concurrently, so each count checks out its own connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _count(self, builder: TaskQueryBuilder) -> int:
        async with self.session_factory() as session:
            count = await session.scalar(builder.build_count())
            return int(count or 0)

    async def for_user(self, user_id: int, now: Optional[datetime] = None) -> TaskStats:
        """Compute the dashboard counts for ``user_id``.

        Args:
            user_id: The acting principal
            now: Reference time for the overdue count (defaults to current UTC time)

        Returns:
            The five counts combined
        """
        now = now or utc_now_naive()
        total, completed, pending, high_priority, overdue = await asyncio.gather(
            self._count(TaskQueryBuilder(user_id)),
            self._count(TaskQueryBuilder(user_id).with_status(COMPLETED_STATUS)),
            self._count(TaskQueryBuilder(user_id).with_status(DEFAULT_STATUS)),
            self._count(TaskQueryBuilder(user_id).with_priority(HIGH_PRIORITY)),
            self._count(TaskQueryBuilder(user_id).overdue(now)),
        )
        logger.debug(f"Computed dashboard stats for user_id={user_id}")
        return TaskStats(
            total_tasks=total,
            completed_tasks=completed,
            pending_tasks=pending,
            high_priority_tasks=high_priority,
            overdue_tasks=overdue,
        )
