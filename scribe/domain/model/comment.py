"""Comment entity.

Comments are threaded at most two tiers deep: top-level comments and a
single level of replies. A reply always points at a top-level comment.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from scribe.domain.model.common import DomainModel, utcnow
from scribe.domain.value import CommentId, CommentStatus, PostId, PostSummary


class Comment(DomainModel):
    """Comment entity.

    Represents a reader comment on a post, or a reply to one.

    Provenance fields (``ip_address``, ``user_agent``) are empty for
    replies written by an administrator.
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId] = None
    author_name: str
    author_email: str
    content: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: CommentStatus = CommentStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


class ThreadedComment(Comment):
    """Top-level comment together with its approved replies."""

    replies: list[Comment] = Field(default_factory=list)


class AdminComment(Comment):
    """Comment joined with a summary of the post it belongs to."""

    post: Optional[PostSummary] = None
