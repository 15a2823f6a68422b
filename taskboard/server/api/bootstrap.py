"""
Schema Bootstrap Endpoint.

Creates the ``users`` and ``tasks`` tables when they are missing. Calling it
again leaves existing tables and data untouched.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.logging_config import get_logger
from taskboard.server.services.deps import DatastoreDep

logger = get_logger(__name__)

router = APIRouter(tags=["bootstrap"])


@router.get(
    "/init-db",
    response_class=PlainTextResponse,
    summary="Create Tables",
    description="Idempotently create the database schema.",
)
async def init_db(datastore: DatastoreDep) -> PlainTextResponse:
    try:
        await datastore.create_tables()
    except SQLAlchemyError as exc:
        logger.error(f"Error creating tables: {exc}", exc_info=True)
        return PlainTextResponse(f"Error creating tables: {exc}", status_code=500)
    return PlainTextResponse("Tables created successfully! You can now register and login.")
