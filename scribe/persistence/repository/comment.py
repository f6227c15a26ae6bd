"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import AdminComment, Comment
from scribe.domain.model.common import utcnow
from scribe.domain.repository import CommentRepository
from scribe.domain.value import CommentId, CommentStatus, PostId
from scribe.persistence.mappers import (
    comment_to_dict,
    row_to_admin_comment,
    row_to_comment,
)
from scribe.persistence.tables import comments_table, posts_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_top_level(
        self,
        post_id: PostId,
        status: CommentStatus,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find top-level comments of a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.status == status.value)
            .order_by(asc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(self, post_id: PostId, status: CommentStatus) -> int:
        """Count top-level comments of a post with the given status."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .where(comments_table.c.status == status.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_replies(
        self,
        parent_ids: Sequence[CommentId],
        status: CommentStatus,
    ) -> List[Comment]:
        """Find replies to any of the given comments, oldest first."""
        if not parent_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(list(parent_ids)))
            .where(comments_table.c.status == status.value)
            .order_by(asc(comments_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_for_admin(
        self,
        status: Optional[CommentStatus],
        limit: int,
        offset: int,
    ) -> List[AdminComment]:
        """Find comments of every post, newest first, joined with their post."""
        stmt = select(
            comments_table,
            posts_table.c.title.label("post_title"),
            posts_table.c.slug.label("post_slug"),
        ).select_from(
            comments_table.outerjoin(
                posts_table, posts_table.c.id == comments_table.c.post_id
            )
        )

        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)

        stmt = (
            stmt.order_by(desc(comments_table.c.created_at)).limit(limit).offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_admin_comment(row._asdict()) for row in result.fetchall()]

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count comments, optionally filtered by status and creation time."""
        stmt = select(func.count()).select_from(comments_table)

        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        if created_since is not None:
            stmt = stmt.where(comments_table.c.created_at >= created_since)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_status(
        self, comment_id: CommentId, status: CommentStatus
    ) -> Optional[Comment]:
        """Overwrite the status of a single comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(status=status.value, updated_at=utcnow())
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def update_status_many(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Overwrite the status of every listed comment in one statement."""
        if not comment_ids:
            return 0

        stmt = (
            update(comments_table)
            .where(comments_table.c.id.in_(list(comment_ids)))
            .values(status=status.value, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete); replies cascade."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()
