"""Comment domain service.

Owns the comment lifecycle: validation of public submissions, the
auto-approve policy, two-tier reply threading, moderation status changes,
soft and hard deletes, bulk moderation and dashboard statistics.

Anti-spam checks are not performed here; callers that accept public input
run AntiSpamService first.
"""

import math
import re
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel

from scribe.domain.error import (
    BatchLimitExceededError,
    NotFoundError,
    PostNotPublishedError,
    ValidationError,
)
from scribe.domain.model import (
    COMMENT_AUTO_APPROVE,
    AdminComment,
    Comment,
    ThreadedComment,
)
from scribe.domain.model.common import utcnow
from scribe.domain.repository import (
    CommentRepository,
    PostRepository,
    SiteSettingRepository,
)
from scribe.domain.value import (
    AdminUser,
    BatchAction,
    CommentId,
    CommentStats,
    CommentStatus,
    PostId,
)

from .base import Service

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_BATCH_LIMIT = 50

# Column widths of comments.author_name and comments.author_email
MAX_AUTHOR_NAME_LENGTH = 100
MAX_AUTHOR_EMAIL_LENGTH = 255


class NewComment(BaseModel):
    """Public comment submission, after anti-spam has passed."""

    post_id: PostId
    parent_id: Optional[CommentId] = None
    author_name: str
    author_email: str
    content: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class ApprovedCommentsPage(BaseModel):
    """One page of approved top-level comments with their replies."""

    comments: list[ThreadedComment]
    total: int
    page: int
    limit: int
    total_pages: int


class AdminCommentsPage(BaseModel):
    """One page of the moderation queue."""

    comments: list[AdminComment]
    total: int
    page: int
    limit: int
    total_pages: int


def resolve_effective_parent(target: Comment) -> CommentId:
    """Return the comment a reply to ``target`` should hang from.

    Threads are two tiers deep. Replying to a reply attaches the new
    comment to the reply's own parent instead.
    """
    return target.parent_id if target.parent_id is not None else target.id


def start_of_today_utc(now: Optional[datetime] = None) -> datetime:
    """Midnight UTC of the current day."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).replace(
        hour=0, minute=0, second=0, microsecond=0
    )


def _total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        setting_repository: SiteSettingRepository,
        batch_limit: int = DEFAULT_BATCH_LIMIT,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (existence and status checks)
            setting_repository: Site settings (auto-approve flag)
            batch_limit: Maximum number of ids accepted by a bulk update
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.setting_repository = setting_repository
        self.batch_limit = batch_limit

    async def create_comment(self, data: NewComment) -> Comment:
        """Validate and persist a public comment.

        Checks run in a fixed order and the first failure is raised:
        author name, email, content, email format, post existence, post
        status, parent existence.

        Args:
            data: Submitted comment fields

        Returns:
            The stored comment

        Raises:
            ValidationError: If a field is missing or malformed
            NotFoundError: If the post or parent comment does not exist
            PostNotPublishedError: If the post is not published
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=data.post_id,
            parent_id=data.parent_id,
        ):
            author_name = (data.author_name or "").strip()
            author_email = (data.author_email or "").strip()
            content = (data.content or "").strip()

            if not author_name:
                raise ValidationError("Author name is required")
            if not author_email:
                raise ValidationError("Email is required")
            if not content:
                raise ValidationError("Content is required")
            if not EMAIL_PATTERN.match(author_email):
                raise ValidationError("Invalid email format")
            if len(author_name) > MAX_AUTHOR_NAME_LENGTH:
                raise ValidationError(
                    f"Author name must be at most {MAX_AUTHOR_NAME_LENGTH} characters"
                )
            if len(author_email) > MAX_AUTHOR_EMAIL_LENGTH:
                raise ValidationError(
                    f"Email must be at most {MAX_AUTHOR_EMAIL_LENGTH} characters"
                )

            post = await self.post_repository.find_by_id(data.post_id)
            if post is None:
                logfire.warn("Comment on missing post", post_id=data.post_id)
                raise NotFoundError("Post not found", resource="post")
            if not post.is_published:
                logfire.warn(
                    "Comment on unpublished post",
                    post_id=data.post_id,
                    post_status=post.status.value,
                )
                raise PostNotPublishedError(data.post_id)

            parent_id: Optional[CommentId] = None
            if data.parent_id:
                parent = await self.comment_repository.find_by_id(data.parent_id)
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=data.parent_id,
                        post_id=data.post_id,
                    )
                    raise NotFoundError("Parent comment not found", resource="comment")
                parent_id = resolve_effective_parent(parent)

            status = await self._initial_status()

            now = utcnow()
            comment = Comment(
                id=CommentId(str(uuid4())),
                post_id=data.post_id,
                parent_id=parent_id,
                author_name=author_name,
                author_email=author_email,
                content=content,
                ip_address=data.ip_address or None,
                user_agent=data.user_agent or None,
                status=status,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                post_id=saved.post_id,
                parent_id=saved.parent_id,
                flattened=parent_id is not None and parent_id != data.parent_id,
                status=saved.status.value,
            )
            return saved

    async def _initial_status(self) -> CommentStatus:
        # Only the exact string "true" turns auto-approval on
        setting = await self.setting_repository.find_by_key(COMMENT_AUTO_APPROVE)
        if setting is not None and setting.value == "true":
            return CommentStatus.APPROVED
        return CommentStatus.PENDING

    async def get_approved_comments(
        self, post_id: PostId, page: int = 1, limit: int = 10
    ) -> ApprovedCommentsPage:
        """Get approved comments of a post in reading order.

        Top-level comments are paginated oldest first; the approved replies
        of the returned page are fetched with a single extra query.

        Args:
            post_id: Post ID
            page: 1-based page number
            limit: Top-level comments per page

        Returns:
            Page of threaded comments
        """
        with logfire.span(
            "comment_service.get_approved_comments",
            post_id=post_id,
            page=page,
            limit=limit,
        ):
            top_level = await self.comment_repository.find_top_level(
                post_id=post_id,
                status=CommentStatus.APPROVED,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.comment_repository.count_top_level(
                post_id, CommentStatus.APPROVED
            )

            if not top_level:
                return ApprovedCommentsPage(
                    comments=[],
                    total=total,
                    page=page,
                    limit=limit,
                    total_pages=_total_pages(total, limit),
                )

            replies = await self.comment_repository.find_replies(
                [comment.id for comment in top_level], CommentStatus.APPROVED
            )
            by_parent: dict[CommentId, list[Comment]] = {}
            for reply in replies:
                by_parent.setdefault(reply.parent_id, []).append(reply)

            threaded = [
                ThreadedComment(
                    **comment.model_dump(), replies=by_parent.get(comment.id, [])
                )
                for comment in top_level
            ]
            logfire.info(
                "Approved comments retrieved",
                post_id=post_id,
                count=len(threaded),
                replies=len(replies),
            )
            return ApprovedCommentsPage(
                comments=threaded,
                total=total,
                page=page,
                limit=limit,
                total_pages=_total_pages(total, limit),
            )

    async def get_admin_comments(
        self,
        status: Optional[CommentStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> AdminCommentsPage:
        """Get the moderation queue, newest first.

        Args:
            status: Optional status filter
            page: 1-based page number
            limit: Comments per page

        Returns:
            Page of comments joined with their post summary
        """
        with logfire.span(
            "comment_service.get_admin_comments",
            status=status.value if status else None,
            page=page,
            limit=limit,
        ):
            comments = await self.comment_repository.find_for_admin(
                status=status, limit=limit, offset=(page - 1) * limit
            )
            total = await self.comment_repository.count(status=status)
            return AdminCommentsPage(
                comments=comments,
                total=total,
                page=page,
                limit=limit,
                total_pages=_total_pages(total, limit),
            )

    async def get_comment_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span("comment_service.get_comment_by_id", comment_id=comment_id):
            return await self.comment_repository.find_by_id(comment_id)

    async def update_comment_status(
        self, comment_id: CommentId, status: CommentStatus
    ) -> Optional[Comment]:
        """Set the status of a comment.

        Any status is reachable from any other. A missing comment is not an
        error: nothing is written and None is returned.

        Args:
            comment_id: Comment ID
            status: New status

        Returns:
            Updated comment, or None if it doesn't exist
        """
        with logfire.span(
            "comment_service.update_comment_status",
            comment_id=comment_id,
            status=status.value,
        ):
            existing = await self.comment_repository.find_by_id(comment_id)
            if existing is None:
                logfire.warn("Comment not found for status update", comment_id=comment_id)
                return None

            updated = await self.comment_repository.update_status(comment_id, status)
            logfire.info(
                "Comment status updated",
                comment_id=comment_id,
                previous_status=existing.status.value,
                status=status.value,
            )
            return updated

    async def delete_comment(self, comment_id: CommentId, hard: bool = False) -> Comment:
        """Delete a comment.

        A soft delete marks the comment DELETED and keeps the row; repeating
        it is harmless. A hard delete removes the row, and the direct replies
        go with it through the persistence cascade.

        Args:
            comment_id: Comment ID
            hard: Physically remove the record

        Returns:
            The soft-deleted comment, or the record as it was before removal

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_service.delete_comment", comment_id=comment_id, hard=hard
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for delete", comment_id=comment_id)
                raise NotFoundError("Comment not found", resource="comment")

            if hard:
                await self.comment_repository.delete(comment_id)
                logfire.info("Comment hard deleted", comment_id=comment_id)
                return comment

            deleted = await self.comment_repository.update_status(
                comment_id, CommentStatus.DELETED
            )
            logfire.info("Comment soft deleted", comment_id=comment_id)
            return deleted or comment

    async def create_admin_reply(
        self, comment_id: CommentId, content: str, admin: AdminUser
    ) -> Comment:
        """Reply to a comment as an administrator.

        The reply is attached directly to ``comment_id`` and starts
        APPROVED. It carries no IP address or user agent.

        Args:
            comment_id: Comment being replied to
            content: Reply text
            admin: Authenticated administrator

        Returns:
            The stored reply

        Raises:
            NotFoundError: If the comment being replied to doesn't exist
        """
        with logfire.span(
            "comment_service.create_admin_reply",
            comment_id=comment_id,
            admin_id=admin.id,
        ):
            parent = await self.comment_repository.find_by_id(comment_id)
            if parent is None:
                logfire.warn("Parent comment not found for admin reply", comment_id=comment_id)
                raise NotFoundError("Parent comment not found", resource="comment")

            now = utcnow()
            reply = Comment(
                id=CommentId(str(uuid4())),
                post_id=parent.post_id,
                parent_id=comment_id,
                author_name=admin.name,
                author_email=admin.email,
                content=content,
                status=CommentStatus.APPROVED,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(reply)
            logfire.info(
                "Admin reply created",
                comment_id=saved.id,
                parent_id=comment_id,
                post_id=saved.post_id,
            )
            return saved

    async def batch_update_comments(
        self, ids: list[CommentId], action: BatchAction
    ) -> int:
        """Apply one moderation action to many comments.

        The size cap is checked before anything is written.

        Args:
            ids: Comment IDs (at most ``batch_limit``)
            action: approve, spam or delete (soft)

        Returns:
            Number of comments updated

        Raises:
            BatchLimitExceededError: If more than ``batch_limit`` ids are given
        """
        with logfire.span(
            "comment_service.batch_update_comments",
            action=action.value,
            size=len(ids),
        ):
            if len(ids) > self.batch_limit:
                logfire.warn(
                    "Batch update rejected",
                    size=len(ids),
                    limit=self.batch_limit,
                )
                raise BatchLimitExceededError(self.batch_limit)

            count = await self.comment_repository.update_status_many(
                ids, action.target_status
            )
            logfire.info(
                "Comments batch updated",
                action=action.value,
                requested=len(ids),
                updated=count,
            )
            return count

    async def get_comment_stats(self) -> CommentStats:
        """Count pending, approved and spam comments and today's new ones.

        "Today" starts at midnight UTC and is computed on every call. The
        four counts are separate reads, not one consistent snapshot.
        """
        with logfire.span("comment_service.get_comment_stats"):
            return CommentStats(
                pending=await self.comment_repository.count(status=CommentStatus.PENDING),
                today_new=await self.comment_repository.count(
                    created_since=start_of_today_utc()
                ),
                approved=await self.comment_repository.count(status=CommentStatus.APPROVED),
                spam=await self.comment_repository.count(status=CommentStatus.SPAM),
            )
