# =============================================================================
# core/models/comment.py - Comment Schemas
# =============================================================================

from datetime import datetime

from pydantic import field_serializer

from lib.utils import format_timestamp

from .base import ConduitModel, RequiredText
from .profile import Profile


class NewComment(ConduitModel):
    body: RequiredText


class NewCommentRequest(ConduitModel):
    """
    Example:
        {"comment": {"body": "His name was my name too."}}
    """

    comment: NewComment


class CommentResponse(ConduitModel):
    id: int
    created_at: datetime
    updated_at: datetime
    body: str
    author: Profile

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class CommentEnvelope(ConduitModel):
    comment: CommentResponse


class MultipleComments(ConduitModel):
    comments: list[CommentResponse]
