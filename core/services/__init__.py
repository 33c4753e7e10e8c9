# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .profile_service import ProfileService
from .article_service import ArticleService
from .comment_service import CommentService
from .tag_service import TagService

__all__ = [
    "UserService",
    "ProfileService",
    "ArticleService",
    "CommentService",
    "TagService",
]
