# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and Argon2 password hashing.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_token_codec,
)
from app.auth.models import AuthUser, TokenPayload
from app.auth.security import TokenCodec, hash_password, verify_password

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_token_codec",
    "AuthUser",
    "TokenPayload",
    "TokenCodec",
    "hash_password",
    "verify_password",
]
