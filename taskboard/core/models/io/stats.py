"""
Dashboard statistics I/O model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DashboardStats(BaseModel):
    """Per-user task counts, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    total_tasks: int = Field(alias="totalTasks")
    completed_tasks: int = Field(alias="completedTasks")
    pending_tasks: int = Field(alias="pendingTasks")
    high_priority_tasks: int = Field(alias="highPriorityTasks")
    overdue_tasks: int = Field(alias="overdueTasks")
