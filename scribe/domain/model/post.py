"""Post read model.

Posts are owned by the editorial side of NovaScribe. The comment core only
needs to know whether a post exists and whether it is published.
"""

from datetime import datetime

from pydantic import Field

from scribe.domain.model.common import DomainModel, utcnow
from scribe.domain.value import PostId, PostStatus, PostSummary


class Post(DomainModel):
    """Published or draft article that comments attach to."""

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    slug: str = Field(min_length=1, max_length=200)
    status: PostStatus = PostStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    def summary(self) -> PostSummary:
        return PostSummary(id=self.id, title=self.title, slug=self.slug)
