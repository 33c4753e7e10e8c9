# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles registration, login and current-user updates.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.security import TokenCodec, hash_password, verify_password
from app.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from core.models.user import LoginUser, NewUser, UpdateUser, UserResponse
from core.services.persistence import commit_or_conflict
from lib.entities import User
from lib.utils import utcnow

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for account operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def build_user(user: User, token: str) -> UserResponse:
        return UserResponse(
            email=user.email,
            token=token,
            username=user.username,
            bio=user.bio,
            image=user.image,
        )

    @staticmethod
    async def _ensure_available(
        session: AsyncSession,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[int] = None,
    ) -> None:
        """
        Raise if username or email already belongs to another user.

        Raises:
            UserAlreadyExistsError: 409 naming the first taken field
        """
        for field, column, value in (
            ("username", User.username, username),
            ("email", User.email, email),
        ):
            if value is None:
                continue
            query = select(User.id).where(column == value)
            if exclude_id is not None:
                query = query.where(User.id != exclude_id)
            if await session.scalar(query) is not None:
                raise UserAlreadyExistsError(field)

    @staticmethod
    async def _commit_account(
        session: AsyncSession,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[int] = None,
    ) -> None:
        """
        Commit an account write.

        If another request claimed the username or email after
        _ensure_available passed, the conflict is reported the same way
        as the up-front check, naming the taken field.
        """
        try:
            await commit_or_conflict(session, "username or email has already been taken")
        except ConflictError:
            await UserService._ensure_available(session, username, email, exclude_id)
            raise

    @staticmethod
    async def register(
        session: AsyncSession,
        codec: TokenCodec,
        data: NewUser,
    ) -> UserResponse:
        """
        Create a new account.

        Args:
            session: The request's session
            codec: Issues the token returned with the new user
            data: Validated registration fields

        Returns:
            The new user with a fresh token

        Raises:
            UserAlreadyExistsError: If username or email is taken
        """
        await UserService._ensure_available(session, data.username, data.email)

        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        session.add(user)
        await UserService._commit_account(session, data.username, data.email)

        logger.info(f"Registered user: {user.id} ({user.username})")
        return UserService.build_user(user, codec.create_token(user.id))

    @staticmethod
    async def login(
        session: AsyncSession,
        codec: TokenCodec,
        data: LoginUser,
    ) -> UserResponse:
        """
        Check credentials and issue a fresh token.

        Unknown email and wrong password produce the same error so the
        response doesn't reveal which accounts exist.

        Raises:
            InvalidCredentialsError: 401 on any mismatch
        """
        user = await session.scalar(select(User).where(User.email == data.email))
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        logger.debug(f"User logged in: {user.id}")
        return UserService.build_user(user, codec.create_token(user.id))

    @staticmethod
    async def get_user(session: AsyncSession, user_id: int) -> User:
        user = await session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    async def get_current_user(
        session: AsyncSession,
        user_id: int,
        token: str,
    ) -> UserResponse:
        """Return the caller's account, echoing the token they presented."""
        user = await UserService.get_user(session, user_id)
        return UserService.build_user(user, token)

    @staticmethod
    async def update_user(
        session: AsyncSession,
        user_id: int,
        token: str,
        data: UpdateUser,
    ) -> UserResponse:
        """
        Apply a partial update to the caller's account.

        Only keys present in the request are applied. A null username,
        email or password means "leave unchanged"; a null bio or image
        clears it.

        Raises:
            UserAlreadyExistsError: If the new username/email belongs to someone else
        """
        user = await UserService.get_user(session, user_id)
        changes = data.model_dump(exclude_unset=True)

        for key in ("username", "email", "password"):
            if changes.get(key) is None:
                changes.pop(key, None)

        await UserService._ensure_available(
            session,
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user.id,
        )

        if "password" in changes:
            user.password_hash = hash_password(changes.pop("password"))
        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = utcnow()

        await UserService._commit_account(
            session,
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user_id,
        )

        logger.info(f"Updated user: {user.id} (fields: {sorted(data.model_fields_set)})")
        return UserService.build_user(user, token)
