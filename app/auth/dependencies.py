# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Accepts both header forms:
# - Authorization: Token <jwt>   (Conduit clients)
# - Authorization: Bearer <jwt>
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import AuthUser
from app.auth.security import TokenCodec
from app.dependencies import get_db
from app.exceptions import AuthenticationError
from lib.entities import User

logger = logging.getLogger(__name__)

# Raw Authorization header extractor; scheme parsing happens below
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="`Token <jwt>` or `Bearer <jwt>`",
)

ACCEPTED_SCHEMES = ("token", "bearer")


def get_token_codec(request: Request) -> TokenCodec:
    """Token signer/verifier configured from the application settings."""
    return request.app.state.token_codec


def extract_token(authorization: str) -> str:
    """
    Split 'Token abc.def.ghi' into its credential part.

    Raises:
        AuthenticationError: If the scheme is unknown or the credential is empty
    """
    scheme, _, credentials = authorization.strip().partition(" ")
    credentials = credentials.strip()

    if scheme.lower() not in ACCEPTED_SCHEMES or not credentials:
        logger.warning(f"Rejected authorization header with scheme {scheme!r}")
        raise AuthenticationError("Invalid authorization header")

    return credentials


async def _authenticate(
    authorization: str,
    codec: TokenCodec,
    session: AsyncSession,
) -> AuthUser:
    token = extract_token(authorization)
    payload = codec.decode_token(token)

    # A valid signature is not enough: the account must still exist
    user = await session.get(User, payload.sub)
    if user is None:
        logger.warning(f"Token refers to missing user: {payload.sub}")
        raise AuthenticationError("User no longer exists")

    logger.debug(f"Authenticated user: {payload.sub}")
    return AuthUser(id=payload.sub, token=token)


async def get_current_user(
    authorization: Optional[str] = Depends(authorization_header),
    codec: TokenCodec = Depends(get_token_codec),
    session: AsyncSession = Depends(get_db),
) -> AuthUser:
    """
    Require an authenticated caller.

    This dependency:
    1. Extracts the token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Confirms the user still exists
    4. Returns an AuthUser with the user's ID and token

    Raises:
        AuthenticationError: 401 if header is missing or token is invalid/expired
    """
    if not authorization:
        raise AuthenticationError("Missing authorization token")

    return await _authenticate(authorization, codec, session)


async def get_current_user_optional(
    authorization: Optional[str] = Depends(authorization_header),
    codec: TokenCodec = Depends(get_token_codec),
    session: AsyncSession = Depends(get_db),
) -> Optional[AuthUser]:
    """
    Optionally get the current user.

    Returns None if no token is provided. A token that IS provided must
    still be valid; an expired or tampered token is rejected with 401
    rather than silently downgraded to anonymous access.
    """
    if not authorization:
        return None

    return await _authenticate(authorization, codec, session)
