# =============================================================================
# app/auth/security.py - Tokens and Password Hashing
# =============================================================================
# Signs and verifies the JWTs handed out at login/registration and hashes
# passwords with Argon2id.
#
# Usage:
#   codec = TokenCodec(secret="...", algorithm="HS256", expire_seconds=86400)
#   token = codec.create_token(user_id=42)
#   payload = codec.decode_token(token)   # raises AuthenticationError
#
#   hashed = hash_password("hunter22")
#   verify_password("hunter22", hashed)   # True
# =============================================================================

import logging
import time

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import TokenPayload
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# Argon2id with the library's RFC 9106 low-memory defaults
_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password into a self-describing Argon2 PHC string (salt included)."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a password against a stored Argon2 hash.

    Returns False on mismatch or on a malformed stored hash.
    """
    try:
        return _password_hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


class TokenCodec:
    """
    Issues and validates signed bearer tokens.

    Claims:
        sub: user id (string form, as JWT requires)
        iat: issued-at timestamp
        exp: expiry timestamp
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_seconds: int = 86400):
        self._secret = secret
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    def create_token(self, user_id: int) -> str:
        now = int(time.time())
        claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._expire_seconds,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry and return the claims.

        Raises:
            AuthenticationError: 401 if token is expired, tampered or malformed
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise AuthenticationError("Token has expired")
        except JWTError as e:
            logger.warning(f"Token validation failed: {e}")
            raise AuthenticationError("Invalid token")

        subject = claims.get("sub")
        if not subject or not str(subject).isdigit():
            logger.warning(f"Token carries a malformed subject: {subject!r}")
            raise AuthenticationError("Invalid token")

        return TokenPayload(sub=int(subject), iat=claims.get("iat"), exp=claims["exp"])
