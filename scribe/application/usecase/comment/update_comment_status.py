"""Update comment status use case."""

from typing import Optional

from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.model import Comment
from scribe.domain.service import CommentService
from scribe.domain.value import CommentId, CommentStatus


class UpdateCommentStatusRequest(BaseModel):
    """Update comment status request."""

    comment_id: CommentId
    status: CommentStatus


class UpdateCommentStatusUseCase(BaseUseCase):
    """Use case for moderating a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentStatusRequest) -> Optional[Comment]:
        """Set the status of one comment.

        Returns:
            The updated comment, or None if it doesn't exist
        """
        return await self.comment_service.update_comment_status(
            request.comment_id, request.status
        )
