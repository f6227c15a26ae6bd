"""In-memory post repository for testing."""

from typing import Optional

from scribe.domain.model import Post
from scribe.domain.repository.post import PostRepository
from scribe.domain.value import PostId

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._db.posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._db.posts[post.id] = post
        return post
