"""Get approved comments use case."""

from pydantic import BaseModel

from scribe.application.usecase.base import BaseUseCase
from scribe.domain.service import ApprovedCommentsPage, CommentService
from scribe.domain.value import PostId

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Keeps (page - 1) * limit inside a BIGINT OFFSET
MAX_PAGE = 1_000_000


class GetApprovedCommentsRequest(BaseModel):
    """Get approved comments request."""

    post_id: PostId
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


class GetApprovedCommentsUseCase(BaseUseCase):
    """Use case for the public, threaded comment list of a post."""

    def __init__(
        self,
        comment_service: CommentService,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.comment_service = comment_service
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(self, request: GetApprovedCommentsRequest) -> ApprovedCommentsPage:
        """Fetch one page of approved comments.

        Out of range paging is corrected rather than rejected. Page and
        limit are clamped to their bounds; a limit below 1 falls back to the
        default page size.
        """
        page = min(max(request.page, 1), MAX_PAGE)
        limit = request.limit
        if limit < 1:
            limit = self.default_page_size
        limit = min(limit, self.max_page_size)

        return await self.comment_service.get_approved_comments(
            request.post_id, page=page, limit=limit
        )
