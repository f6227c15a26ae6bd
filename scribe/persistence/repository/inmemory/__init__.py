"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .database import InMemoryDatabase
from .post import InMemoryPostRepository
from .setting import InMemorySiteSettingRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryDatabase",
    "InMemoryPostRepository",
    "InMemorySiteSettingRepository",
]
