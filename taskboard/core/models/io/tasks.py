"""
Task I/O models for API requests and responses.

Request bodies are deliberately permissive: the datastore's constraints
decide whether a row is acceptable.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: Optional[str] = Field(default=None, examples=["Write quarterly report"])
    description: Optional[str] = None
    priority: Optional[str] = Field(default=None, description="Free-form priority, e.g. 'High' or 'Low'")
    deadline: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Schema for partially updating a task.

    Every field is optional; a missing or null field keeps its stored value.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = Field(default=None, examples=["Completed"])
    deadline: Optional[datetime] = None


class TaskFilter(BaseModel):
    """Query string filters for listing tasks."""

    status: Optional[str] = Field(default=None, description="Exact status match")
    priority: Optional[str] = Field(default=None, description="Exact priority match")
    search: Optional[str] = Field(default=None, description="Case-insensitive substring of title or description")


class TaskRead(BaseModel):
    """Schema for a task row as stored."""

    model_config = ConfigDict(from_attributes=True)

    task_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    status: str
    deadline: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
