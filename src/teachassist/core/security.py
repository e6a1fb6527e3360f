"""
Request Authentication Context

Access tokens are issued by the external identity service; this module only
verifies them and exposes the caller as a request-scoped ``AuthContext``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from authlib.jose import JsonWebToken
from authlib.jose.errors import ExpiredTokenError, JoseError
from fastapi import HTTPException, Request, status

from teachassist.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller for one request."""

    user_id: UUID
    email: str | None
    access_token: str


def decode_access_token(token: str) -> AuthContext:
    """Verify a bearer token and build the caller context.

    Args:
        token: Encoded JWT

    Returns:
        AuthContext for the token subject

    Raises:
        HTTPException 401: Token invalid, expired, or without a UUID subject
    """
    jwt = JsonWebToken([settings.AUTH_JWT_ALGORITHM])
    try:
        claims = jwt.decode(token, settings.AUTH_JWT_SECRET)
        claims.validate()
    except ExpiredTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired."
        ) from e
    except JoseError as e:
        logger.info(f"Rejected access token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate token."
        ) from e

    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalid: subject missing."
        ) from e

    return AuthContext(user_id=user_id, email=claims.get("email"), access_token=token)


async def get_auth_context(request: Request) -> AuthContext | None:
    """Dependency: caller context, or None for anonymous requests."""
    header = request.headers.get("Authorization")
    if not header:
        return None

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authorization header."
        )

    return decode_access_token(token.strip())


def user_id_of(auth: AuthContext | None) -> UUID | None:
    """User id for the bridge layer; None means anonymous."""
    return auth.user_id if auth else None
