"""Submit comment use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.model import Comment, Post
from scribe.domain.repository import PostRepository
from scribe.domain.service import AntiSpamService, CommentService, NewComment
from scribe.domain.value import AntiSpamResult, CommentId, PostId


class SubmitCommentRequest(BaseModel):
    """Public comment submission as received from a reader."""

    post_id: PostId
    author_name: str
    author_email: str
    content: str
    parent_id: Optional[CommentId] = None
    honeypot: Optional[str] = None
    ip_address: str
    user_agent: Optional[str] = None


class SubmitCommentResponse(BaseModel):
    """Submission outcome.

    When ``anti_spam`` did not pass nothing was stored and ``comment`` is
    None. ``post`` is loaded for the admin notification.
    """

    anti_spam: AntiSpamResult
    comment: Optional[Comment] = None
    post: Optional[Post] = None

    @property
    def accepted(self) -> bool:
        return self.comment is not None


class SubmitCommentUseCase(BaseUseCase):
    """Use case for a public comment: anti-spam first, then the lifecycle."""

    def __init__(
        self,
        antispam_service: AntiSpamService,
        comment_service: CommentService,
        post_repository: PostRepository,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            antispam_service: Anti-spam decision service
            comment_service: Comment domain service
            post_repository: Post repository (notification context)
        """
        self.antispam_service = antispam_service
        self.comment_service = comment_service
        self.post_repository = post_repository

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Steps:
        1. Run honeypot, flood and content checks
        2. Create the comment via comment service (validation, threading,
           auto-approve)
        3. Load the post for the notification

        Args:
            request: Submitted comment with client metadata

        Returns:
            Anti-spam decision and, if it passed, the stored comment

        Raises:
            ValidationError: If a field is missing or malformed
            NotFoundError: If the post or parent comment does not exist
        """
        result = self.antispam_service.check_anti_spam(
            content=request.content,
            honeypot=request.honeypot,
            ip_address=request.ip_address,
        )
        if not result.passed:
            return SubmitCommentResponse(anti_spam=result)

        comment = await self.comment_service.create_comment(
            NewComment(
                post_id=request.post_id,
                parent_id=request.parent_id,
                author_name=request.author_name,
                author_email=request.author_email,
                content=request.content,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
            )
        )

        post = await self.post_repository.find_by_id(comment.post_id)
        if post is None:
            logfire.warn("Post vanished after comment creation", post_id=comment.post_id)

        return SubmitCommentResponse(anti_spam=result, comment=comment, post=post)
