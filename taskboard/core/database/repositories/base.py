"""
Base repository utilities.

This module provides the persistence helpers shared by the repository
implementations. Built with async SQLAlchemy sessions over SQLModel entities.
"""

from __future__ import annotations

from typing import Generic, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from taskboard.core.errors import Conflict
from taskboard.core.logging_config import get_logger

logger = get_logger(__name__)

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(Generic[EntityType]):
    """Base async repository bound to one session and one SQLModel entity class."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def _insert(self, entity: EntityType) -> EntityType:
        """Persist a new entity in a single INSERT and reload generated fields.

        Constraint violations (unique, foreign key, NOT NULL) are rolled back
        and re-raised as ``Conflict`` carrying the driver's message.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """
        self.session.add(entity)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning(f"{self.model.__name__} insert rejected by datastore: {exc.orig}")
            raise Conflict(str(exc.orig)) from exc
        await self.session.refresh(entity)
        return entity
