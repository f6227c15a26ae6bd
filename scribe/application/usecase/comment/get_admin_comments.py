"""Get admin comments use case."""

from typing import Optional

from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.application.usecase.comment.get_approved_comments import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
)
from scribe.domain.service import AdminCommentsPage, CommentService
from scribe.domain.value import CommentStatus

DEFAULT_PAGE_SIZE = 20


class GetAdminCommentsRequest(BaseModel):
    """Get admin comments request.

    ``status`` is the raw query value; anything that is not a known status
    lists every comment.
    """

    status: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


class GetAdminCommentsUseCase(BaseUseCase):
    """Use case for the moderation queue."""

    def __init__(
        self,
        comment_service: CommentService,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.comment_service = comment_service
        self.default_page_size = default_page_size

    async def execute(self, request: GetAdminCommentsRequest) -> AdminCommentsPage:
        status = _parse_status(request.status)
        page = min(max(request.page, 1), MAX_PAGE)
        limit = request.limit if request.limit >= 1 else self.default_page_size
        limit = min(limit, MAX_PAGE_SIZE)

        return await self.comment_service.get_admin_comments(
            status=status, page=page, limit=limit
        )


def _parse_status(value: Optional[str]) -> Optional[CommentStatus]:
    if not value:
        return None
    try:
        return CommentStatus(value.upper())
    except ValueError:
        return None
