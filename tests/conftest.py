"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from scribe.domain.model import COMMENT_AUTO_APPROVE, Comment, Post, SiteSetting
from scribe.domain.model.common import utcnow
from scribe.domain.value import CommentId, CommentStatus, PostId, PostStatus

# Keep telemetry local; instrumentation calls in create_app need a configured logfire
logfire.configure(send_to_logfire=False, console=False)


def make_post(
    status: PostStatus = PostStatus.PUBLISHED,
    title: str = "Hello World",
    post_id: str | None = None,
) -> Post:
    """Build a post, published unless told otherwise."""
    post_id = post_id or str(uuid4())
    return Post(
        id=PostId(post_id),
        title=title,
        slug=f"post-{post_id[:8]}",
        status=status,
    )


def make_comment(
    post_id: PostId,
    parent_id: CommentId | None = None,
    status: CommentStatus = CommentStatus.APPROVED,
    content: str = "Nice post!",
    created_at: datetime | None = None,
    author_email: str = "reader@example.com",
) -> Comment:
    """Build a stored comment directly, bypassing validation."""
    created_at = created_at or utcnow()
    return Comment(
        id=CommentId(str(uuid4())),
        post_id=post_id,
        parent_id=parent_id,
        author_name="Reader",
        author_email=author_email,
        content=content,
        ip_address="203.0.113.7",
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def minutes_ago(minutes: int) -> datetime:
    return utcnow() - timedelta(minutes=minutes)


def auto_approve(value: str) -> SiteSetting:
    """The comment_auto_approve setting row with ``value``."""
    return SiteSetting(key=COMMENT_AUTO_APPROVE, value=value)


class FakeClock:
    """Manually advanced monotonic clock for rate limiter tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
