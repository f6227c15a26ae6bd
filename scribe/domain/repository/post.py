"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model import Post
from scribe.domain.value import PostId


class PostRepository(ABC):
    """Read access to posts for the comment core."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass
