"""Domain repository interfaces."""

from scribe.domain.repository.comment import CommentRepository
from scribe.domain.repository.post import PostRepository
from scribe.domain.repository.setting import SiteSettingRepository

__all__ = [
    "CommentRepository",
    "PostRepository",
    "SiteSettingRepository",
]
