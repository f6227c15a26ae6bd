"""PostgreSQL repository implementations."""

from scribe.persistence.repository.comment import PostgresCommentRepository
from scribe.persistence.repository.post import PostgresPostRepository
from scribe.persistence.repository.setting import PostgresSiteSettingRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresSiteSettingRepository",
]
