# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation and
# response serialization:
# - base.py: ConduitModel (camelCase aliases) and shared string types
# - user.py: Registration, login, current-user schemas
# - profile.py: Public profile schemas
# - article.py: Article CRUD and list schemas
# - comment.py: Comment schemas
# - tag.py: Tag list schema
#
# These models define the "contract" between API and clients.
# =============================================================================

from .base import ConduitModel, RequiredText, ShortText, TagName

# -----------------------------------------------------------------------------
# User Models - Accounts and authentication
# -----------------------------------------------------------------------------
from .user import (
    LoginUser,
    LoginUserRequest,
    NewUser,
    NewUserRequest,
    UpdateUser,
    UpdateUserRequest,
    UserEnvelope,
    UserResponse,
)

# -----------------------------------------------------------------------------
# Profile Models - Public view of a user
# -----------------------------------------------------------------------------
from .profile import Profile, ProfileEnvelope

# -----------------------------------------------------------------------------
# Article Models - Posts, lists and feeds
# -----------------------------------------------------------------------------
from .article import (
    ArticleEnvelope,
    ArticleResponse,
    MultipleArticles,
    NewArticle,
    NewArticleRequest,
    UpdateArticle,
    UpdateArticleRequest,
)

# -----------------------------------------------------------------------------
# Comment Models
# -----------------------------------------------------------------------------
from .comment import (
    CommentEnvelope,
    CommentResponse,
    MultipleComments,
    NewComment,
    NewCommentRequest,
)

# -----------------------------------------------------------------------------
# Tag Models
# -----------------------------------------------------------------------------
from .tag import TagList

__all__ = [
    # Base
    "ConduitModel",
    "RequiredText",
    "ShortText",
    "TagName",
    # User
    "LoginUser",
    "LoginUserRequest",
    "NewUser",
    "NewUserRequest",
    "UpdateUser",
    "UpdateUserRequest",
    "UserEnvelope",
    "UserResponse",
    # Profile
    "Profile",
    "ProfileEnvelope",
    # Article
    "ArticleEnvelope",
    "ArticleResponse",
    "MultipleArticles",
    "NewArticle",
    "NewArticleRequest",
    "UpdateArticle",
    "UpdateArticleRequest",
    # Comment
    "CommentEnvelope",
    "CommentResponse",
    "MultipleComments",
    "NewComment",
    "NewCommentRequest",
    # Tag
    "TagList",
]
