# =============================================================================
# core/models/tag.py - Tag Schemas
# =============================================================================

from .base import ConduitModel


class TagList(ConduitModel):
    """
    Every known tag, alphabetical.

    Example:
        {"tags": ["dragons", "reactjs"]}
    """

    tags: list[str]
