"""
Database repository layer.

Modules:
- base: AsyncBaseRepository shared persistence helpers
- users: Registration and login lookups
- tasks: Owner-scoped task CRUD and the TaskQueryBuilder
- stats: Concurrent dashboard aggregation
"""

from .base import AsyncBaseRepository
from .stats import StatsRepository, TaskStats
from .tasks import TaskChanges, TaskQueryBuilder, TaskRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "StatsRepository",
    "TaskChanges",
    "TaskQueryBuilder",
    "TaskRepository",
    "TaskStats",
    "UserRepository",
]
