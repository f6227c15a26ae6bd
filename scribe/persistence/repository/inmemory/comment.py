"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from scribe.domain.model import AdminComment, Comment
from scribe.domain.model.common import utcnow
from scribe.domain.repository.comment import CommentRepository
from scribe.domain.value import CommentId, CommentStatus, PostId

from .database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self._db.comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_top_level(
        self,
        post_id: PostId,
        status: CommentStatus,
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Find top-level comments of a post, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None and c.status == status
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments[offset : offset + limit]

    async def count_top_level(self, post_id: PostId, status: CommentStatus) -> int:
        """Count top-level comments of a post with the given status."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None and c.status == status
        )

    async def find_replies(
        self,
        parent_ids: Sequence[CommentId],
        status: CommentStatus,
    ) -> list[Comment]:
        """Find replies to any of the given comments, oldest first."""
        wanted = set(parent_ids)
        replies = [
            c
            for c in self._comments.values()
            if c.parent_id in wanted and c.status == status
        ]
        replies.sort(key=lambda c: c.created_at)
        return replies

    async def find_for_admin(
        self,
        status: Optional[CommentStatus],
        limit: int,
        offset: int,
    ) -> list[AdminComment]:
        """Find comments of every post, newest first, joined with their post."""
        comments = list(self._comments.values())
        if status is not None:
            comments = [c for c in comments if c.status == status]

        comments.sort(key=lambda c: c.created_at, reverse=True)

        result = []
        for comment in comments[offset : offset + limit]:
            post = self._db.posts.get(comment.post_id)
            result.append(
                AdminComment(
                    **comment.model_dump(),
                    post=post.summary() if post else None,
                )
            )
        return result

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count comments, optionally filtered by status and creation time."""
        return sum(
            1
            for c in self._comments.values()
            if (status is None or c.status == status)
            and (created_since is None or c.created_at >= created_since)
        )

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_status(
        self, comment_id: CommentId, status: CommentStatus
    ) -> Optional[Comment]:
        """Overwrite the status of a single comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        # Comments are immutable; store an updated copy
        updated = comment.model_copy(update={"status": status, "updated_at": utcnow()})
        self._comments[comment_id] = updated
        return updated

    async def update_status_many(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Overwrite the status of every listed comment."""
        count = 0
        for comment_id in set(comment_ids):
            if await self.update_status(comment_id, status) is not None:
                count += 1
        return count

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and, like the ON DELETE CASCADE, its replies."""
        if self._comments.pop(comment_id, None) is None:
            return

        for reply_id in [c.id for c in self._comments.values() if c.parent_id == comment_id]:
            await self.delete(reply_id)
