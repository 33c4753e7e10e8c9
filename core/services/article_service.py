# =============================================================================
# core/services/article_service.py - Article Business Logic
# =============================================================================
# Handles article CRUD, listing/feed, tags and favorites.
#
# Rendering an article needs three viewer-dependent facts besides the row
# itself: favoritesCount, favorited and author.following. For pages of
# articles these are fetched with one grouped query each instead of one
# per article.
# =============================================================================

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ArticleNotFoundError, AuthorizationError
from core.models.article import (
    ArticleResponse,
    MultipleArticles,
    NewArticle,
    UpdateArticle,
)
from core.services.persistence import commit_or_conflict, insert_ignoring_duplicate
from core.services.profile_service import ProfileService
from lib.entities import Article, Comment, Tag, User, article_tags, favorites, follows
from lib.utils import MAX_SLUG_LENGTH, slugify, utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
# Largest OFFSET every supported backend accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1

# "-" plus up to 11 digits, and one hyphen trimmed from the cut base
_SUFFIX_ROOM = 13


def _with_suffix(base: str, suffix: int) -> str:
    tail = f"-{suffix}"
    return base[: MAX_SLUG_LENGTH - len(tail)].rstrip("-") + tail


class ArticleService:
    """
    Service for article operations.

    Only an article's author may update or delete it. Favorites are
    idempotent in both directions.
    """

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    @staticmethod
    async def _unique_slug(
        session: AsyncSession,
        title: str,
        exclude_id: Optional[int] = None,
    ) -> str:
        """
        Slug for title that no other article uses.

        "My Post" -> "my-post", then "my-post-2", "my-post-3", ...

        A suffixed slug shortens the base so the result still fits the
        column.
        """
        base = slugify(title)
        # Every candidate starts with this prefix, whatever its suffix
        stem = base[: MAX_SLUG_LENGTH - _SUFFIX_ROOM]
        query = select(Article.slug).where(Article.slug.like(f"{stem}%"))
        if exclude_id is not None:
            query = query.where(Article.id != exclude_id)
        taken = set((await session.scalars(query)).all())

        candidate = base
        suffix = 1
        while candidate in taken:
            suffix += 1
            candidate = _with_suffix(base, suffix)
        return candidate

    @staticmethod
    async def _resolve_tags(session: AsyncSession, names: Sequence[str]) -> list[Tag]:
        """
        Tag rows for names, creating the missing ones.

        Blank names are dropped and duplicates collapse to one tag.
        """
        wanted = sorted({name.strip() for name in names if name and name.strip()})
        if not wanted:
            return []

        existing = await session.scalars(select(Tag).where(Tag.name.in_(wanted)))
        by_name = {tag.name: tag for tag in existing.all()}
        for name in wanted:
            if name not in by_name:
                tag = Tag(name=name)
                session.add(tag)
                by_name[name] = tag
        return [by_name[name] for name in wanted]

    @staticmethod
    async def _load(session: AsyncSession, slug: str) -> Article:
        """
        Fetch an article with its author and tags.

        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article = await session.scalar(
            select(Article)
            .where(Article.slug == slug)
            .execution_options(populate_existing=True)
        )
        if article is None:
            raise ArticleNotFoundError(slug)
        return article

    @staticmethod
    async def is_favorited(session: AsyncSession, user_id: int, article_id: int) -> bool:
        result = await session.execute(
            select(favorites.c.article_id).where(
                favorites.c.user_id == user_id,
                favorites.c.article_id == article_id,
            )
        )
        return result.first() is not None

    @staticmethod
    async def get_article_id(session: AsyncSession, slug: str) -> int:
        """
        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article_id = await session.scalar(select(Article.id).where(Article.slug == slug))
        if article_id is None:
            raise ArticleNotFoundError(slug)
        return article_id

    @staticmethod
    async def _render_many(
        session: AsyncSession,
        articles: Sequence[Article],
        viewer_id: Optional[int],
    ) -> list[ArticleResponse]:
        if not articles:
            return []
        article_ids = [article.id for article in articles]

        counts = dict(
            (
                await session.execute(
                    select(favorites.c.article_id, func.count())
                    .where(favorites.c.article_id.in_(article_ids))
                    .group_by(favorites.c.article_id)
                )
            ).all()
        )

        favorited: set[int] = set()
        if viewer_id is not None:
            favorited = set(
                (
                    await session.scalars(
                        select(favorites.c.article_id).where(
                            favorites.c.user_id == viewer_id,
                            favorites.c.article_id.in_(article_ids),
                        )
                    )
                ).all()
            )

        following = await ProfileService.followed_among(
            session, viewer_id, (article.author_id for article in articles)
        )

        return [
            ArticleResponse(
                slug=article.slug,
                title=article.title,
                description=article.description,
                body=article.body,
                tag_list=sorted(tag.name for tag in article.tags),
                created_at=article.created_at,
                updated_at=article.updated_at,
                favorited=article.id in favorited,
                favorites_count=counts.get(article.id, 0),
                author=ProfileService.build_profile(
                    article.author, article.author_id in following
                ),
            )
            for article in articles
        ]

    @staticmethod
    async def _render(
        session: AsyncSession,
        article: Article,
        viewer_id: Optional[int],
    ) -> ArticleResponse:
        rendered = await ArticleService._render_many(session, [article], viewer_id)
        return rendered[0]

    @staticmethod
    async def _page(
        session: AsyncSession,
        conditions: list,
        viewer_id: Optional[int],
        limit: int,
        offset: int,
    ) -> MultipleArticles:
        total = await session.scalar(
            select(func.count()).select_from(Article).where(*conditions)
        )
        articles = await session.scalars(
            select(Article)
            .where(*conditions)
            .order_by(Article.created_at.desc(), Article.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return MultipleArticles(
            articles=await ArticleService._render_many(session, articles.all(), viewer_id),
            articles_count=total or 0,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    async def list_articles(
        session: AsyncSession,
        viewer_id: Optional[int] = None,
        tag: Optional[str] = None,
        author: Optional[str] = None,
        favorited: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> MultipleArticles:
        """
        List articles, most recent first.

        Args:
            session: The request's session
            viewer_id: Caller's user ID, or None when anonymous
            tag: Only articles carrying this tag
            author: Only articles written by this username
            favorited: Only articles favorited by this username
            limit: Page size
            offset: Number of matches to skip

        Returns:
            The page plus the total number of matches
        """
        conditions = []
        if tag:
            conditions.append(Article.tags.any(Tag.name == tag))
        if author:
            conditions.append(Article.author.has(User.username == author))
        if favorited:
            conditions.append(
                Article.id.in_(
                    select(favorites.c.article_id)
                    .join_from(favorites, User, User.id == favorites.c.user_id)
                    .where(User.username == favorited)
                )
            )
        return await ArticleService._page(session, conditions, viewer_id, limit, offset)

    @staticmethod
    async def feed(
        session: AsyncSession,
        viewer_id: int,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> MultipleArticles:
        """Articles written by users the viewer follows, most recent first."""
        conditions = [
            Article.author_id.in_(
                select(follows.c.followed_id).where(follows.c.follower_id == viewer_id)
            )
        ]
        return await ArticleService._page(session, conditions, viewer_id, limit, offset)

    @staticmethod
    async def get_article(
        session: AsyncSession,
        slug: str,
        viewer_id: Optional[int] = None,
    ) -> ArticleResponse:
        """
        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article = await ArticleService._load(session, slug)
        return await ArticleService._render(session, article, viewer_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    async def create_article(
        session: AsyncSession,
        author_id: int,
        data: NewArticle,
    ) -> ArticleResponse:
        """
        Create an article and its tag associations in one transaction.

        Returns:
            The new article as seen by its author
        """
        slug = await ArticleService._unique_slug(session, data.title)
        article = Article(
            slug=slug,
            title=data.title,
            description=data.description,
            body=data.body,
            author_id=author_id,
            tags=await ArticleService._resolve_tags(session, data.tag_list),
        )
        session.add(article)
        await commit_or_conflict(session, "An article with this slug already exists")

        logger.info(f"Created article: {slug} by user: {author_id}")
        return await ArticleService.get_article(session, slug, author_id)

    @staticmethod
    async def update_article(
        session: AsyncSession,
        slug: str,
        user_id: int,
        data: UpdateArticle,
    ) -> ArticleResponse:
        """
        Apply a partial update. A new title regenerates the slug.

        Raises:
            ArticleNotFoundError: If no article has that slug
            AuthorizationError: If user_id is not the author
        """
        article = await ArticleService._load(session, slug)
        if article.author_id != user_id:
            raise AuthorizationError("article", slug)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return await ArticleService._render(session, article, user_id)

        if "title" in changes and changes["title"] != article.title:
            article.slug = await ArticleService._unique_slug(
                session, changes["title"], exclude_id=article.id
            )
        if "tag_list" in changes:
            article.tags = await ArticleService._resolve_tags(session, changes.pop("tag_list"))
        for key, value in changes.items():
            setattr(article, key, value)
        article.updated_at = utcnow()

        await commit_or_conflict(session, "An article with this slug already exists")

        logger.info(f"Updated article: {slug} -> {article.slug}")
        return await ArticleService.get_article(session, article.slug, user_id)

    @staticmethod
    async def delete_article(session: AsyncSession, slug: str, user_id: int) -> None:
        """
        Delete an article with its comments, favorites and tag links.

        Raises:
            ArticleNotFoundError: If no article has that slug
            AuthorizationError: If user_id is not the author
        """
        article = await ArticleService._load(session, slug)
        if article.author_id != user_id:
            raise AuthorizationError("article", slug)

        article_id = article.id
        await session.execute(delete(Comment).where(Comment.article_id == article_id))
        await session.execute(delete(favorites).where(favorites.c.article_id == article_id))
        await session.execute(delete(article_tags).where(article_tags.c.article_id == article_id))
        await session.execute(
            delete(Article)
            .where(Article.id == article_id)
            .execution_options(synchronize_session=False)
        )
        session.expunge(article)
        await session.commit()

        logger.info(f"Deleted article: {slug} (id: {article_id})")

    @staticmethod
    async def favorite(session: AsyncSession, slug: str, user_id: int) -> ArticleResponse:
        """
        Favorite an article. Repeating it changes nothing.

        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article = await ArticleService._load(session, slug)

        if not await ArticleService.is_favorited(session, user_id, article.id):
            statement = insert(favorites).values(user_id=user_id, article_id=article.id)
            if await insert_ignoring_duplicate(session, statement):
                logger.info(f"User {user_id} favorited article: {slug}")
            else:
                # A concurrent request stored the same favorite first
                article = await ArticleService._load(session, slug)

        return await ArticleService._render(session, article, user_id)

    @staticmethod
    async def unfavorite(session: AsyncSession, slug: str, user_id: int) -> ArticleResponse:
        """
        Remove a favorite. No error if the article wasn't favorited.

        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article = await ArticleService._load(session, slug)

        result = await session.execute(
            delete(favorites).where(
                favorites.c.user_id == user_id,
                favorites.c.article_id == article.id,
            )
        )
        await session.commit()
        if result.rowcount:
            logger.info(f"User {user_id} unfavorited article: {slug}")

        return await ArticleService._render(session, article, user_id)
