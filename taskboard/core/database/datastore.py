"""
Datastore handle.

``Datastore`` owns the async engine (and therefore the connection pool) and the
session factory. One instance is built when the application starts, shared by
every request handler, and disposed when the application shuts down.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from taskboard.core.logging_config import get_logger

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)


class Datastore:
    """Pooled access to the relational datastore."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = create_sessionmaker(engine)

    @classmethod
    def from_url(cls, db_url: str, **engine_kwargs) -> "Datastore":
        """Build a datastore for ``db_url``.

        Args:
            db_url: Database connection URL
            **engine_kwargs: Extra keyword arguments for the engine

        Returns:
            A new Datastore owning its own engine
        """
        return cls(create_engine(db_url, **engine_kwargs))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session; its connection goes back to the pool on exit."""
        async with self.session_factory() as session:
            yield session

    async def create_tables(self) -> None:
        await create_all(self.engine)
        logger.info("Database tables created (or already present)")

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises if the datastore is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Datastore connection pool disposed")
