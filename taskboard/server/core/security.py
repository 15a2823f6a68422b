"""
Credential handling.

Passwords are stored as salted bcrypt hashes. Sessions are stateless: login
issues a signed JWT carrying the user id and an expiry one hour out, and
every protected request verifies the signature and expiry. There is no
server-side session or revocation state.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from taskboard.core.errors import Forbidden
from taskboard.core.logging_config import get_logger

from .config import settings

logger = get_logger(__name__)

USER_ID_CLAIM = "user_id"


def _prehash(password: str) -> bytes:
    """SHA-256 the password first so inputs longer than bcrypt's 72-byte limit still count in full."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest().encode("ascii")


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash ``password`` with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never verify."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(
    user_id: int,
    *,
    expires_in: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed bearer token for ``user_id``.

    Args:
        user_id: The principal the token asserts
        expires_in: Lifetime; defaults to the configured expiry (one hour)
        now: Issue time, mainly for tests

    Returns:
        The encoded JWT
    """
    jwt_config = settings.jwt
    issued_at = now or datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else timedelta(seconds=jwt_config.expire_seconds)
    claims: dict[str, Any] = {
        USER_ID_CLAIM: user_id,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, jwt_config.secret.get_secret_value(), algorithm=jwt_config.algorithm)


def decode_access_token(token: str) -> int:
    """Verify ``token`` and return the user id it carries.

    Expired, tampered and malformed tokens are all rejected with the same
    ``Forbidden`` error.

    Raises:
        Forbidden: If the token cannot be verified or carries no user id
    """
    jwt_config = settings.jwt
    try:
        claims = jwt.decode(token, jwt_config.secret.get_secret_value(), algorithms=[jwt_config.algorithm])
    except JWTError as exc:
        logger.debug(f"Bearer token rejected: {type(exc).__name__}")
        raise Forbidden() from exc

    user_id = claims.get(USER_ID_CLAIM)
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        logger.debug("Bearer token rejected: missing or invalid user id claim")
        raise Forbidden()
    return user_id
