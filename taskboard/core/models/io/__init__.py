"""
I/O models for API requests and responses.

These models define the contract between the HTTP endpoints and clients and
are kept separate from database entities.

Modules:
- users: Registration, login and user rows
- tasks: Task creation, partial update and task rows
- stats: Dashboard statistics
"""

from .stats import DashboardStats
from .tasks import TaskCreate, TaskFilter, TaskRead, TaskUpdate
from .users import LoginRequest, RegisterRequest, TokenResponse, UserRead

__all__ = [
    "DashboardStats",
    "LoginRequest",
    "RegisterRequest",
    "TaskCreate",
    "TaskFilter",
    "TaskRead",
    "TaskUpdate",
    "TokenResponse",
    "UserRead",
]
