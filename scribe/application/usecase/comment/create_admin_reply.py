"""Create admin reply use case."""

from typing import Annotated, Optional

from pydantic import BaseModel, StringConstraints

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.error import NotFoundError
from scribe.domain.model import Comment, Post
from scribe.domain.repository import PostRepository
from scribe.domain.service import CommentService
from scribe.domain.value import AdminUser, CommentId


class CreateAdminReplyRequest(BaseModel):
    """Create admin reply request."""

    comment_id: CommentId
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    admin: AdminUser


class CreateAdminReplyResponse(BaseModel):
    """The stored reply plus what the reply notification needs."""

    reply: Comment
    parent: Comment
    post: Optional[Post] = None


class CreateAdminReplyUseCase(BaseUseCase):
    """Use case for an administrator replying to a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_repository: PostRepository,
    ) -> None:
        """Initialize create admin reply use case.

        Args:
            comment_service: Comment domain service
            post_repository: Post repository (notification context)
        """
        self.comment_service = comment_service
        self.post_repository = post_repository

    async def execute(self, request: CreateAdminReplyRequest) -> CreateAdminReplyResponse:
        """Execute create admin reply flow.

        Args:
            request: Target comment, reply text and administrator

        Returns:
            Reply, the comment it answers and that comment's post

        Raises:
            NotFoundError: If the comment being replied to doesn't exist
        """
        reply = await self.comment_service.create_admin_reply(
            request.comment_id, request.content, request.admin
        )

        parent = await self.comment_service.get_comment_by_id(request.comment_id)
        if parent is None:
            raise NotFoundError("Parent comment not found", resource="comment")

        post = await self.post_repository.find_by_id(reply.post_id)
        return CreateAdminReplyResponse(reply=reply, parent=parent, post=post)
