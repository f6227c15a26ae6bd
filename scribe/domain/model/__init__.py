"""Domain model entities for NovaScribe."""

from scribe.domain.model.comment import AdminComment, Comment, ThreadedComment
from scribe.domain.model.post import Post
from scribe.domain.model.setting import COMMENT_AUTO_APPROVE, SiteSetting

__all__ = [
    "AdminComment",
    "COMMENT_AUTO_APPROVE",
    "Comment",
    "Post",
    "SiteSetting",
    "ThreadedComment",
]
