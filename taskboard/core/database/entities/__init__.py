"""
Database entity models.

Modules:
- users: Registered accounts and their password hashes
- tasks: Tasks owned by a single user
"""

from . import tasks, users
from .tasks import Task
from .users import User

__all__ = [
    "Task",
    "User",
    "tasks",
    "users",
]
