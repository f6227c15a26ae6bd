"""In-memory site setting repository for testing."""

from typing import Optional

from scribe.domain.model import SiteSetting
from scribe.domain.repository.setting import SiteSettingRepository

from .database import InMemoryDatabase


class InMemorySiteSettingRepository(SiteSettingRepository):
    """In-memory implementation of SiteSettingRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_key(self, key: str) -> Optional[SiteSetting]:
        """Find a setting row by key."""
        return self._db.settings.get(key)

    async def save(self, setting: SiteSetting) -> SiteSetting:
        """Insert or update a setting row."""
        self._db.settings[setting.key] = setting
        return setting
