# =============================================================================
# app/routers/comments.py - Comment Endpoints
# =============================================================================
# Endpoints:
#   GET    /articles/{slug}/comments       - list (optional auth)
#   POST   /articles/{slug}/comments       - add (auth)
#   DELETE /articles/{slug}/comments/{id}  - delete (comment author only)
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Response, status

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import SessionDep
from core.models.comment import CommentEnvelope, MultipleComments, NewCommentRequest
from core.services.comment_service import CommentService
from lib.entities import MAX_ID

router = APIRouter()

SlugPath = Annotated[str, Path(description="Article slug")]


@router.get("/articles/{slug}/comments", response_model=MultipleComments)
async def list_comments(
    slug: SlugPath,
    session: SessionDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """All comments on an article, oldest first."""
    return await CommentService.list_comments(
        session, slug, viewer_id=user.id if user else None
    )


@router.post(
    "/articles/{slug}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    slug: SlugPath,
    request: NewCommentRequest,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Add a comment to an article."""
    comment = await CommentService.add_comment(session, slug, user.id, request.comment)
    return CommentEnvelope(comment=comment)


@router.delete("/articles/{slug}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    slug: SlugPath,
    comment_id: Annotated[int, Path(ge=1, le=MAX_ID, description="Comment ID")],
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete a comment. Only its author may do this."""
    await CommentService.delete_comment(session, slug, comment_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
