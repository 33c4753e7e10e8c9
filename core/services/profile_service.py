# =============================================================================
# core/services/profile_service.py - Profile & Follow Business Logic
# =============================================================================
# Handles public profiles and the follow graph.
# Also renders the "author" profile embedded in articles and comments, so
# other services share one definition of "following".
# =============================================================================

import logging
from typing import Iterable, Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ProfileNotFoundError, ValidationFailedError
from core.models.profile import Profile
from core.services.persistence import insert_ignoring_duplicate
from lib.entities import User, follows

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Service for profile lookups and follow/unfollow.

    Follow operations are idempotent: following twice leaves one row,
    unfollowing someone you don't follow is a no-op.
    """

    # -------------------------------------------------------------------------
    # Rendering helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def build_profile(user: User, following: bool) -> Profile:
        return Profile(
            username=user.username,
            bio=user.bio,
            image=user.image,
            following=following,
        )

    @staticmethod
    async def is_following(
        session: AsyncSession,
        follower_id: Optional[int],
        followed_id: int,
    ) -> bool:
        if follower_id is None:
            return False
        result = await session.execute(
            select(follows.c.followed_id).where(
                follows.c.follower_id == follower_id,
                follows.c.followed_id == followed_id,
            )
        )
        return result.first() is not None

    @staticmethod
    async def followed_among(
        session: AsyncSession,
        follower_id: Optional[int],
        candidate_ids: Iterable[int],
    ) -> set[int]:
        """
        Which of candidate_ids the follower follows, in one query.

        Used when rendering a list of articles/comments by many authors.
        """
        candidates = set(candidate_ids)
        if follower_id is None or not candidates:
            return set()
        result = await session.scalars(
            select(follows.c.followed_id).where(
                follows.c.follower_id == follower_id,
                follows.c.followed_id.in_(candidates),
            )
        )
        return set(result.all())

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @staticmethod
    async def get_user_by_username(session: AsyncSession, username: str) -> User:
        """
        Raises:
            ProfileNotFoundError: If no user has that username
        """
        user = await session.scalar(select(User).where(User.username == username))
        if user is None:
            raise ProfileNotFoundError(username)
        return user

    @staticmethod
    async def get_profile(
        session: AsyncSession,
        username: str,
        viewer_id: Optional[int] = None,
    ) -> Profile:
        """
        Get a profile as seen by viewer_id (None for anonymous).

        Raises:
            ProfileNotFoundError: If the username doesn't exist
        """
        user = await ProfileService.get_user_by_username(session, username)
        following = await ProfileService.is_following(session, viewer_id, user.id)
        return ProfileService.build_profile(user, following)

    @staticmethod
    async def follow(session: AsyncSession, username: str, follower_id: int) -> Profile:
        """
        Follow a user.

        Raises:
            ProfileNotFoundError: If the username doesn't exist
            ValidationFailedError: If a user tries to follow themselves
        """
        user = await ProfileService.get_user_by_username(session, username)
        if user.id == follower_id:
            raise ValidationFailedError("You cannot follow yourself", field="username")

        if not await ProfileService.is_following(session, follower_id, user.id):
            statement = insert(follows).values(follower_id=follower_id, followed_id=user.id)
            if await insert_ignoring_duplicate(session, statement):
                logger.info(f"User {follower_id} followed {user.id}")
            else:
                # A concurrent request stored the same follow first
                user = await ProfileService.get_user_by_username(session, username)

        return ProfileService.build_profile(user, following=True)

    @staticmethod
    async def unfollow(session: AsyncSession, username: str, follower_id: int) -> Profile:
        """
        Stop following a user. No error if not currently following.

        Raises:
            ProfileNotFoundError: If the username doesn't exist
        """
        user = await ProfileService.get_user_by_username(session, username)

        result = await session.execute(
            delete(follows).where(
                follows.c.follower_id == follower_id,
                follows.c.followed_id == user.id,
            )
        )
        await session.commit()
        if result.rowcount:
            logger.info(f"User {follower_id} unfollowed {user.id}")

        return ProfileService.build_profile(user, following=False)
