"""Domain value objects for NovaScribe.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field

from scribe.domain.value.common import ValueObject
from scribe.domain.value.identifiers import AdminUserId, PostId


class CommentStatus(str, Enum):
    """Moderation status of a comment.

    Any status can be set from any other status; there is no transition
    table. DELETED marks a soft-deleted comment that is still stored.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    SPAM = "SPAM"
    DELETED = "DELETED"


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class BatchAction(str, Enum):
    """Bulk moderation action applied from the admin comment table."""

    APPROVE = "approve"
    SPAM = "spam"
    DELETE = "delete"

    @property
    def target_status(self) -> CommentStatus:
        """Status written by this action. Batch delete is always soft."""
        return _BATCH_ACTION_STATUS[self]


_BATCH_ACTION_STATUS = {
    BatchAction.APPROVE: CommentStatus.APPROVED,
    BatchAction.SPAM: CommentStatus.SPAM,
    BatchAction.DELETE: CommentStatus.DELETED,
}


class SpamReason(str, Enum):
    """Why a public comment submission was rejected."""

    HONEYPOT = "honeypot"
    RATE_LIMIT = "rate_limit"
    FORBIDDEN_WORD = "forbidden_word"
    TOO_MANY_LINKS = "too_many_links"
    CONTENT_TOO_SHORT = "content_too_short"
    CONTENT_TOO_LONG = "content_too_long"


class AntiSpamResult(ValueObject):
    """Outcome of an anti-spam check.

    This is a decision, not an error: callers inspect ``reason`` to pick
    the HTTP status to answer with.
    """

    passed: bool = Field(alias="pass")
    reason: SpamReason | None = None

    @classmethod
    def ok(cls) -> "AntiSpamResult":
        return cls(passed=True)

    @classmethod
    def reject(cls, reason: SpamReason) -> "AntiSpamResult":
        return cls(passed=False, reason=reason)


class PostSummary(ValueObject):
    """Post fields joined onto admin comment listings."""

    id: PostId
    title: str
    slug: str


class AdminUser(ValueObject):
    """Authenticated administrator replying to comments."""

    id: AdminUserId
    name: str
    email: str


class CommentStats(ValueObject):
    """Dashboard counters for the admin comment page."""

    pending: int
    today_new: int
    approved: int
    spam: int
