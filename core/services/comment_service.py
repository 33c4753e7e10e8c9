# =============================================================================
# core/services/comment_service.py - Comment Business Logic
# =============================================================================
# Comments belong to one article. Only their author may delete them.
# =============================================================================

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AuthorizationError, CommentNotFoundError
from core.models.comment import CommentResponse, MultipleComments, NewComment
from core.services.article_service import ArticleService
from core.services.profile_service import ProfileService
from lib.entities import Comment

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment operations."""

    @staticmethod
    async def _render_many(
        session: AsyncSession,
        comments: Sequence[Comment],
        viewer_id: Optional[int],
    ) -> list[CommentResponse]:
        following = await ProfileService.followed_among(
            session, viewer_id, (comment.author_id for comment in comments)
        )
        return [
            CommentResponse(
                id=comment.id,
                created_at=comment.created_at,
                updated_at=comment.updated_at,
                body=comment.body,
                author=ProfileService.build_profile(
                    comment.author, comment.author_id in following
                ),
            )
            for comment in comments
        ]

    @staticmethod
    async def add_comment(
        session: AsyncSession,
        slug: str,
        author_id: int,
        data: NewComment,
    ) -> CommentResponse:
        """
        Add a comment to an article.

        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article_id = await ArticleService.get_article_id(session, slug)

        comment = Comment(body=data.body, article_id=article_id, author_id=author_id)
        session.add(comment)
        await session.commit()
        logger.info(f"Created comment: {comment.id} on article: {slug}")

        # Reload so the author relationship is populated
        comment = await session.scalar(
            select(Comment)
            .where(Comment.id == comment.id)
            .execution_options(populate_existing=True)
        )
        rendered = await CommentService._render_many(session, [comment], author_id)
        return rendered[0]

    @staticmethod
    async def list_comments(
        session: AsyncSession,
        slug: str,
        viewer_id: Optional[int] = None,
    ) -> MultipleComments:
        """
        All comments on an article, oldest first.

        Raises:
            ArticleNotFoundError: If no article has that slug
        """
        article_id = await ArticleService.get_article_id(session, slug)
        comments = await session.scalars(
            select(Comment)
            .where(Comment.article_id == article_id)
            .order_by(Comment.created_at, Comment.id)
        )
        return MultipleComments(
            comments=await CommentService._render_many(session, comments.all(), viewer_id)
        )

    @staticmethod
    async def delete_comment(
        session: AsyncSession,
        slug: str,
        comment_id: int,
        user_id: int,
    ) -> None:
        """
        Delete a comment.

        Raises:
            ArticleNotFoundError: If no article has that slug
            CommentNotFoundError: If the comment doesn't exist on that article
            AuthorizationError: If user_id is not the comment's author
        """
        article_id = await ArticleService.get_article_id(session, slug)
        comment = await session.scalar(
            select(Comment).where(
                Comment.id == comment_id,
                Comment.article_id == article_id,
            )
        )
        if comment is None:
            raise CommentNotFoundError(comment_id)
        if comment.author_id != user_id:
            raise AuthorizationError("comment", comment_id)

        await session.delete(comment)
        await session.commit()
        logger.info(f"Deleted comment: {comment_id} from article: {slug}")
