"""Domain value objects for NovaScribe."""

from scribe.domain.value.identifiers import AdminUserId, CommentId, PostId
from scribe.domain.value.types import (
    AdminUser,
    AntiSpamResult,
    BatchAction,
    CommentStats,
    CommentStatus,
    PostStatus,
    PostSummary,
    SpamReason,
)

__all__ = [
    # Identifiers
    "AdminUserId",
    "CommentId",
    "PostId",
    # Types
    "AdminUser",
    "AntiSpamResult",
    "BatchAction",
    "CommentStats",
    "CommentStatus",
    "PostStatus",
    "PostSummary",
    "SpamReason",
]
