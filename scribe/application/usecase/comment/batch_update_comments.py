"""Batch update comments use case."""

from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.service import CommentService
from scribe.domain.value import BatchAction, CommentId


class BatchUpdateCommentsRequest(BaseModel):
    """Batch update comments request."""

    ids: list[CommentId]
    action: BatchAction


class BatchUpdateCommentsResponse(BaseModel):
    """Batch update comments response."""

    updated: int


class BatchUpdateCommentsUseCase(BaseUseCase):
    """Use case for bulk moderation."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: BatchUpdateCommentsRequest
    ) -> BatchUpdateCommentsResponse:
        """Apply the action to every listed comment.

        Raises:
            BatchLimitExceededError: If too many ids are given
        """
        updated = await self.comment_service.batch_update_comments(
            request.ids, request.action
        )
        return BatchUpdateCommentsResponse(updated=updated)
