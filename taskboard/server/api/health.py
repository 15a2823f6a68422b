"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from taskboard.server.core import constant
from taskboard.server.services.deps import DatastoreDep

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health Check",
    description="Check that the server is up and the datastore answers.",
    response_description="Status object.",
)
async def health_check(datastore: DatastoreDep):
    """
    Health check endpoint.

    Runs ``SELECT 1`` against the datastore; a datastore failure is answered
    with 500 by the datastore error handler.
    """
    await datastore.ping()
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
