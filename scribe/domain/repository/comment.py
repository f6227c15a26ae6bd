"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from scribe.domain.model import AdminComment, Comment
from scribe.domain.value import CommentId, CommentStatus, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        post_id: PostId,
        status: CommentStatus,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find top-level comments of a post, oldest first.

        Args:
            post_id: The post ID
            status: Only comments with this status are returned
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Comments whose parent_id is null, ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def count_top_level(self, post_id: PostId, status: CommentStatus) -> int:
        """Count top-level comments of a post with the given status."""
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_ids: Sequence[CommentId],
        status: CommentStatus,
    ) -> List[Comment]:
        """Find replies to any of the given comments, oldest first.

        Args:
            parent_ids: IDs of the top-level comments
            status: Only replies with this status are returned

        Returns:
            Replies ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def find_for_admin(
        self,
        status: Optional[CommentStatus],
        limit: int,
        offset: int,
    ) -> List[AdminComment]:
        """Find comments of every post, newest first, joined with their post.

        Args:
            status: Optional status filter (None returns every status)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Comments with a post summary attached
        """
        pass

    @abstractmethod
    async def count(
        self,
        status: Optional[CommentStatus] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count comments, optionally filtered by status and creation time.

        Args:
            status: Only count comments with this status
            created_since: Only count comments created at or after this instant

        Returns:
            Number of matching comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_status(
        self, comment_id: CommentId, status: CommentStatus
    ) -> Optional[Comment]:
        """Overwrite the status of a single comment.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def update_status_many(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Overwrite the status of every listed comment in one statement.

        Returns:
            Number of rows updated
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Direct replies are removed with it by the cascade on parent_id.

        Args:
            comment_id: The comment ID to delete
        """
        pass
