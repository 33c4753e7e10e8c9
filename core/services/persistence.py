# =============================================================================
# core/services/persistence.py - Transaction Helpers
# =============================================================================
# Services commit their own writes so that a response is only produced
# once the data is durable. Uniqueness races that slip past the service's
# up-front checks surface here as IntegrityError and become 409s, or
# no-ops for presence-only rows such as follows and favorites.
# =============================================================================

import logging

from sqlalchemy import Insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError

logger = logging.getLogger(__name__)


async def commit_or_conflict(session: AsyncSession, message: str) -> None:
    """
    Commit the session, mapping a constraint violation to ConflictError.

    Args:
        session: The request's session
        message: Client-facing message used if the commit conflicts

    Raises:
        ConflictError: 409 if a unique/foreign key constraint fails
    """
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.warning(f"Commit rejected by constraint: {e.orig}")
        raise ConflictError(message)


async def insert_ignoring_duplicate(session: AsyncSession, statement: Insert) -> bool:
    """
    Run and commit a presence-only insert (a follow, a favorite) that
    another request may have made first.

    Returns:
        True if the row was written, False if a constraint rejected it.
        On False the session has been rolled back and every loaded
        instance is expired, so callers must reload what they render.
    """
    try:
        await session.execute(statement)
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.info(f"Insert already applied, ignoring: {e.orig}")
        return False
    return True
