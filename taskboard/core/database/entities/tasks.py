"""
Task entity model.

Every task belongs to exactly one user. The owner never changes after
creation, and all reads and writes go through owner-scoped queries.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, func
from sqlmodel import Field

from ..base import Base
from ..utils import utc_now_naive

DEFAULT_STATUS = "Pending"
COMPLETED_STATUS = "Completed"
HIGH_PRIORITY = "High"


class Task(Base, table=True):
    """Personal task.

    ``priority`` and ``status`` are free-form strings; the service only gives
    meaning to ``"Pending"``, ``"Completed"`` and ``"High"`` when computing
    dashboard statistics.

    Table: tasks
    """

    __tablename__ = "tasks"
    __table_args__ = ({"extend_existing": True},)

    task_id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.user_id", index=True, ondelete="CASCADE")
    title: str = Field(max_length=255)
    description: Optional[str] = None
    priority: Optional[str] = Field(default=None, max_length=50)
    status: str = Field(
        default=DEFAULT_STATUS,
        max_length=50,
        sa_column_kwargs={"server_default": DEFAULT_STATUS},
    )
    # Timestamps are naive UTC, stored in a plain DateTime column
    deadline: Optional[datetime] = Field(default=None, sa_type=DateTime())
    created_at: datetime = Field(
        default_factory=utc_now_naive,
        sa_type=DateTime(),
        sa_column_kwargs={"server_default": func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utc_now_naive,
        sa_type=DateTime(),
        sa_column_kwargs={"server_default": func.now()},
    )

    def __repr__(self) -> str:
        return f"Task(task_id={self.task_id}, user_id={self.user_id}, status={self.status})"
