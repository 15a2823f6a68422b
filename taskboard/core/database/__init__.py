"""
Database layer for Taskboard.

Structure:
- entities/: SQLModel table models (users, tasks)
- repositories/: Owner-scoped data access, query building and aggregation
- datastore.py: The pooled datastore handle shared by request handlers
- utils.py: Engine, session factory and timestamp helpers
"""

from .base import Base
from .datastore import Datastore
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    utc_now_naive,
)

__all__ = [
    "Base",
    "Datastore",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now_naive",
]
