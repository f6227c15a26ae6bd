"""Shared storage for the in-memory repositories.

Repositories are created per request, so they keep no rows themselves;
they all read and write one InMemoryDatabase that lives as long as the
container.
"""

from scribe.domain.model import Comment, Post, SiteSetting
from scribe.domain.value import CommentId, PostId


class InMemoryDatabase:
    """Dict-backed tables keyed by primary key."""

    def __init__(self) -> None:
        self.comments: dict[CommentId, Comment] = {}
        self.posts: dict[PostId, Post] = {}
        self.settings: dict[str, SiteSetting] = {}

    def clear(self) -> None:
        self.comments.clear()
        self.posts.clear()
        self.settings.clear()
