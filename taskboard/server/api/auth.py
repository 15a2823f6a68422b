"""
Authentication Endpoints.

Registration stores a bcrypt hash of the password; login verifies it and
issues a one-hour bearer token.
"""

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from taskboard.core.database.repositories.users import UserRepository
from taskboard.core.errors import InvalidCredentials, UserNotFound
from taskboard.core.logging_config import get_logger
from taskboard.core.models.io.users import LoginRequest, RegisterRequest, TokenResponse, UserRead
from taskboard.server.core.security import create_access_token, hash_password, verify_password
from taskboard.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    summary="Register User",
    description="Create a user account. The response is the stored user row.",
    responses={500: {"description": "Datastore error, e.g. the email is already registered"}},
)
async def register(body: RegisterRequest, session: SessionDep) -> UserRead:
    """
    Register a new user.

    - **name**: Display name.
    - **email**: Login email; must not already be registered.
    - **password**: Plain password; only its salted hash is stored.
    """
    user = await UserRepository(session).create(
        name=body.name,
        email=body.email,
        password_hash=await run_in_threadpool(hash_password, body.password),
    )
    logger.info(f"Registered user {user.user_id}")
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Exchange email and password for a bearer token valid for one hour.",
    responses={
        400: {"description": "No user with this email"},
        401: {"description": "Wrong password"},
    },
)
async def login(body: LoginRequest, session: SessionDep) -> TokenResponse:
    user = await UserRepository(session).get_by_email(body.email)
    if user is None:
        raise UserNotFound()
    if not await run_in_threadpool(verify_password, body.password, user.password):
        raise InvalidCredentials()
    return TokenResponse(token=create_access_token(user.user_id))
