"""Get comment stats use case."""

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.service import CommentService
from scribe.domain.value import CommentStats


class GetCommentStatsUseCase(BaseUseCase):
    """Use case for the moderation dashboard counters."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: None = None) -> CommentStats:
        return await self.comment_service.get_comment_stats()
