# =============================================================================
# core/models/article.py - Article Schemas
# =============================================================================
# These models define the API contract for articles:
# - NewArticleRequest: POST /articles
# - UpdateArticleRequest: PUT /articles/{slug}
# - ArticleEnvelope: a single article
# - MultipleArticles: list and feed responses with the total match count
#
# Timestamps are serialized as ISO-8601 UTC with millisecond precision
# ("2024-01-15T10:30:00.000Z").
# =============================================================================

from datetime import datetime
from typing import Optional

from pydantic import Field, field_serializer

from lib.utils import format_timestamp

from .base import ConduitModel, RequiredText, ShortText, TagName
from .profile import Profile


class NewArticle(ConduitModel):
    """
    Fields for a new article.

    Example:
        {
            "title": "How to train your dragon",
            "description": "Ever wonder how?",
            "body": "You have to believe",
            "tagList": ["reactjs", "angularjs", "dragons"]
        }
    """

    title: ShortText
    description: RequiredText
    body: RequiredText
    tag_list: list[TagName] = Field(default_factory=list)


class NewArticleRequest(ConduitModel):
    article: NewArticle


class UpdateArticle(ConduitModel):
    """
    Partial update; only the keys present are applied.

    A new title also produces a new slug.
    """

    title: Optional[ShortText] = None
    description: Optional[RequiredText] = None
    body: Optional[RequiredText] = None
    tag_list: Optional[list[TagName]] = None


class UpdateArticleRequest(ConduitModel):
    article: UpdateArticle


class ArticleResponse(ConduitModel):
    """
    One article as seen by a given viewer.

    favorited and author.following depend on the viewer; both are false
    for anonymous requests.
    """

    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str]
    created_at: datetime
    updated_at: datetime
    favorited: bool
    favorites_count: int
    author: Profile

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class ArticleEnvelope(ConduitModel):
    article: ArticleResponse


class MultipleArticles(ConduitModel):
    """
    A page of articles.

    articles_count is the number of matches before limit/offset, so
    clients can render pagination.
    """

    articles: list[ArticleResponse]
    articles_count: int
