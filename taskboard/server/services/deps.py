"""
Request Dependencies.

Provides the datastore handle, a per-request session and the authenticated
principal to API endpoints.
"""

from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.database import Datastore
from taskboard.core.errors import Unauthenticated
from taskboard.server.core.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False, description="Token issued by /login")


def get_datastore(request: Request) -> Datastore:
    """Return the datastore built by the application lifespan."""
    return request.app.state.datastore


async def get_session(
    datastore: Annotated[Datastore, Depends(get_datastore)],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: A session closed when the request ends. Closing rolls back
        any uncommitted transaction and returns the connection to the pool.
    """
    async with datastore.session() as session:
        yield session


async def get_current_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> int:
    """
    Credential gate for protected routes.

    Raises:
        Unauthenticated: No bearer token was presented (401)
        Forbidden: The token is invalid, expired or malformed (403)

    Returns:
        The acting principal's user id.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)


DatastoreDep = Annotated[Datastore, Depends(get_datastore)]
SessionDep = Annotated[AsyncSession, Depends(get_session)]
CurrentUserDep = Annotated[int, Depends(get_current_user_id)]
