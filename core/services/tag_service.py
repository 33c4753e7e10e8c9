# =============================================================================
# core/services/tag_service.py - Tag Business Logic
# =============================================================================

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.tag import TagList
from lib.entities import Tag


class TagService:
    """Read-only access to the tag vocabulary."""

    @staticmethod
    async def list_tags(session: AsyncSession) -> TagList:
        """Every tag name, alphabetical. Names are unique, so no duplicates."""
        names = await session.scalars(select(Tag.name).order_by(Tag.name))
        return TagList(tags=list(names.all()))
