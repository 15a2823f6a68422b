"""
User entity model.

A user is created on registration and never mutated or deleted afterwards.
Email uniqueness is enforced by the datastore.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, func
from sqlmodel import Field

from ..base import Base
from ..utils import utc_now_naive


class User(Base, table=True):
    """Registered account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    user_id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    # bcrypt hash, never the plain password
    password: str
    created_at: datetime = Field(
        default_factory=utc_now_naive,
        sa_type=DateTime(),
        sa_column_kwargs={"server_default": func.now()},
    )

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id}, email={self.email})"
