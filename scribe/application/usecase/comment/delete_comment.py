"""Delete comment use case."""

from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.service import CommentService
from scribe.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: CommentId
    hard: bool = False


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool = True


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft or hard deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Delete a comment.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        await self.comment_service.delete_comment(request.comment_id, hard=request.hard)
        return DeleteCommentResponse()
