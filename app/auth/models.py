# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TokenPayload(BaseModel):
    """
    Decoded JWT claims.
    """
    sub: int  # User ID
    exp: int  # Expiration timestamp
    iat: Optional[int] = None  # Issued at timestamp


class AuthUser(BaseModel):
    """
    Authenticated caller.

    Carries the verified user id and the raw token that was presented,
    which GET /user echoes back.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    token: str
