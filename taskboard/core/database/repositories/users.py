"""
User repository.

Registration inserts one row; login looks a user up by email. Users are
never updated or deleted.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def create(self, *, name: Optional[str], email: str, password_hash: str) -> User:
        """Insert a new user.

        Args:
            name: Display name
            email: Login email, unique across users
            password_hash: bcrypt hash of the password

        Returns:
            The persisted user

        Raises:
            Conflict: If the email is already registered
        """
        return await self._insert(User(name=name, email=email, password=password_hash))

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()
