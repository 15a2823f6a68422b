"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for registering a new user."""

    name: Optional[str] = Field(default=None, description="Display name", examples=["Ada Lovelace"])
    email: str = Field(description="Login email, unique across users", examples=["ada@example.com"])
    password: str = Field(description="Plain password; only its hash is stored")


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: str
    password: str


class TokenResponse(BaseModel):
    token: str = Field(description="Bearer token valid for one hour")


class UserRead(BaseModel):
    """Schema for a user row as stored.

    The row includes the password hash, which is returned by ``/register``
    exactly as it is stored.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: Optional[str] = None
    email: str
    password: str = Field(description="bcrypt password hash")
    created_at: datetime
