# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for account operations:
# - NewUserRequest: POST /users (registration)
# - LoginUserRequest: POST /users/login
# - UpdateUserRequest: PUT /user
# - UserEnvelope: every response that returns the current user
#
# Every payload is wrapped in a "user" key:
#   {"user": {"email": "jake@jake.jake", "password": "jakejake"}}
# =============================================================================

import re
from typing import Annotated, Optional

from pydantic import Field, StringConstraints, field_validator

from .base import ConduitModel, RequiredText, ShortText

# Deliberately loose: one @, no whitespace, a dot in the domain
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("is not a valid email address")
    return value


def _check_password(value: str) -> str:
    # Passwords keep their whitespace but cannot be only whitespace
    if not value.strip():
        raise ValueError("can't be blank")
    return value


class NewUser(ConduitModel):
    """
    Registration fields.

    Example:
        {
            "username": "Jacob",
            "email": "jake@jake.jake",
            "password": "jakejake"
        }
    """

    username: ShortText
    email: ShortText
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class NewUserRequest(ConduitModel):
    user: NewUser


class LoginUser(ConduitModel):
    email: RequiredText
    password: str = Field(..., min_length=1)


class LoginUserRequest(ConduitModel):
    user: LoginUser


class UpdateUser(ConduitModel):
    """
    Partial update of the current user.

    Only the keys present in the request are applied. username, email and
    password may be omitted but not blanked; bio and image may be cleared
    by sending null.
    """

    email: Optional[ShortText] = None
    username: Optional[ShortText] = None
    password: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[Annotated[str, StringConstraints(max_length=2048)]] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_password(value)


class UpdateUserRequest(ConduitModel):
    user: UpdateUser


class UserResponse(ConduitModel):
    """
    The authenticated user, as returned to its owner.

    Example:
        {
            "email": "jake@jake.jake",
            "token": "eyJhbGciOiJIUzI1NiJ9...",
            "username": "jake",
            "bio": "I work at statefarm",
            "image": null
        }
    """

    email: str
    token: str
    username: str
    bio: Optional[str] = None
    image: Optional[str] = None


class UserEnvelope(ConduitModel):
    user: UserResponse
