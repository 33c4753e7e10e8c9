# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every domain error renders the Conduit error envelope:
#   {"errors": {"body": ["<message>"]}, "code": "<MACHINE_CODE>"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ConduitException(Exception):
    """
    Base exception for the Conduit API.

    All custom exceptions inherit from this class.
    Provides structured error responses with a stable machine-readable code.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONDUIT_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "errors": {"body": [self.message]},
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationFailedError(ConduitException):
    """Raised when a field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details={"field": field} if field else None,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(ConduitException):
    """Raised when a credential is missing, malformed, expired or stale."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            headers={"WWW-Authenticate": "Token"},
        )


class InvalidCredentialsError(ConduitException):
    """Raised when login email/password do not match a user."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class AuthorizationError(ConduitException):
    """Raised when a user acts on a resource they do not own."""

    def __init__(self, resource: str, identifier: str | int):
        super().__init__(
            message=f"You are not the author of this {resource}",
            code="FORBIDDEN",
            status_code=403,
            details={"resource": resource, "id": identifier},
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class UserNotFoundError(ConduitException):
    """Raised when an authenticated user's row no longer exists."""

    def __init__(self, user_id: int):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(ConduitException):
    """Raised when a username doesn't exist."""

    def __init__(self, username: str):
        super().__init__(
            message=f"Profile not found: {username}",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            details={"username": username},
        )


class ArticleNotFoundError(ConduitException):
    """Raised when an article slug doesn't exist."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Article not found: {slug}",
            code="ARTICLE_NOT_FOUND",
            status_code=404,
            details={"slug": slug},
        )


class CommentNotFoundError(ConduitException):
    """Raised when a comment doesn't exist on the given article."""

    def __init__(self, comment_id: int):
        super().__init__(
            message=f"Comment not found: {comment_id}",
            code="COMMENT_NOT_FOUND",
            status_code=404,
            details={"comment_id": comment_id},
        )


# =============================================================================
# Conflict Exceptions
# =============================================================================

class ConflictError(ConduitException):
    """Raised when a write would violate a uniqueness constraint."""

    def __init__(self, message: str, code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            details=details,
        )


class UserAlreadyExistsError(ConflictError):
    """Raised when a username or email is already taken."""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field} has already been taken",
            code="USER_EXISTS",
            details={"field": field},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def conduit_exception_handler(
    request: Request,
    exc: ConduitException
) -> JSONResponse:
    """Convert ConduitException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


def _describe_validation_error(error: dict[str, Any]) -> str:
    """Render one pydantic error as '<field> <reason>'."""
    # Drop the location prefix ("body", "query", "path") and the envelope key
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = location[-1] if location else "request"
    return f"{field} {error.get('msg', 'is invalid').lower()}"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to the Conduit error envelope.
    """
    messages = [_describe_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=422,
        content={
            "errors": {"body": messages or ["Validation error"]},
            "code": "VALIDATION_ERROR",
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "errors": {"body": ["An unexpected error occurred"]},
            "code": "INTERNAL_ERROR",
        }
    )
