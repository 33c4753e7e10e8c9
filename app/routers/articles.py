# =============================================================================
# app/routers/articles.py - Article Endpoints
# =============================================================================
# Endpoints:
#   GET    /articles                 - list with filters (optional auth)
#   GET    /articles/feed            - followed authors only (auth)
#   GET    /articles/{slug}          - one article (optional auth)
#   POST   /articles                 - create (auth)
#   PUT    /articles/{slug}          - update (author only)
#   DELETE /articles/{slug}          - delete (author only)
#   POST   /articles/{slug}/favorite - favorite (auth)
#   DELETE /articles/{slug}/favorite - unfavorite (auth)
#
# /articles/feed is declared before /articles/{slug} so "feed" is never
# mistaken for a slug.
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import SessionDep
from core.models.article import (
    ArticleEnvelope,
    MultipleArticles,
    NewArticleRequest,
    UpdateArticleRequest,
)
from core.services.article_service import DEFAULT_LIMIT, MAX_LIMIT, MAX_OFFSET, ArticleService

router = APIRouter()

SlugPath = Annotated[str, Path(description="Article slug")]
LimitQuery = Annotated[int, Query(ge=1, le=MAX_LIMIT, description="Page size")]
OffsetQuery = Annotated[int, Query(ge=0, le=MAX_OFFSET, description="Number of articles to skip")]


# =============================================================================
# Listing
# =============================================================================

@router.get("/articles", response_model=MultipleArticles)
async def list_articles(
    session: SessionDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
    tag: Annotated[Optional[str], Query(description="Filter by tag")] = None,
    author: Annotated[Optional[str], Query(description="Filter by author username")] = None,
    favorited: Annotated[Optional[str], Query(description="Filter by username who favorited")] = None,
    limit: LimitQuery = DEFAULT_LIMIT,
    offset: OffsetQuery = 0,
):
    """
    List articles, most recent first.

    articlesCount is the total number of matches, independent of
    limit/offset.
    """
    return await ArticleService.list_articles(
        session,
        viewer_id=user.id if user else None,
        tag=tag,
        author=author,
        favorited=favorited,
        limit=limit,
        offset=offset,
    )


@router.get("/articles/feed", response_model=MultipleArticles)
async def feed_articles(
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
    limit: LimitQuery = DEFAULT_LIMIT,
    offset: OffsetQuery = 0,
):
    """Articles by users the caller follows, most recent first."""
    return await ArticleService.feed(session, user.id, limit=limit, offset=offset)


# =============================================================================
# CRUD
# =============================================================================

@router.get("/articles/{slug}", response_model=ArticleEnvelope)
async def get_article(
    slug: SlugPath,
    session: SessionDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """Get one article by slug."""
    article = await ArticleService.get_article(
        session, slug, viewer_id=user.id if user else None
    )
    return ArticleEnvelope(article=article)


@router.post("/articles", response_model=ArticleEnvelope, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: NewArticleRequest,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create an article.

    The slug is derived from the title and made unique with a numeric
    suffix when needed. Unknown tags are created.
    """
    article = await ArticleService.create_article(session, user.id, request.article)
    return ArticleEnvelope(article=article)


@router.put("/articles/{slug}", response_model=ArticleEnvelope)
async def update_article(
    slug: SlugPath,
    request: UpdateArticleRequest,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update an article. Only its author may do this.

    Changing the title changes the slug; the response carries the new one.
    """
    article = await ArticleService.update_article(session, slug, user.id, request.article)
    return ArticleEnvelope(article=article)


@router.delete("/articles/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    slug: SlugPath,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete an article and everything attached to it. Author only."""
    await ArticleService.delete_article(session, slug, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Favorites
# =============================================================================

@router.post("/articles/{slug}/favorite", response_model=ArticleEnvelope)
async def favorite_article(
    slug: SlugPath,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Favorite an article."""
    article = await ArticleService.favorite(session, slug, user.id)
    return ArticleEnvelope(article=article)


@router.delete("/articles/{slug}/favorite", response_model=ArticleEnvelope)
async def unfavorite_article(
    slug: SlugPath,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Remove a favorite."""
    article = await ArticleService.unfavorite(session, slug, user.id)
    return ArticleEnvelope(article=article)
