"""Site setting repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model import SiteSetting


class SiteSettingRepository(ABC):
    """Repository for site-wide key/value settings."""

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[SiteSetting]:
        """Find a setting row by key.

        Args:
            key: Setting key, e.g. ``comment_auto_approve``

        Returns:
            The setting if present, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, setting: SiteSetting) -> SiteSetting:
        """Insert or update a setting row."""
        pass
