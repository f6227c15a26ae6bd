"""PostgreSQL implementation of SiteSetting repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.domain.model import SiteSetting
from scribe.domain.repository import SiteSettingRepository
from scribe.persistence.mappers import row_to_setting
from scribe.persistence.tables import site_settings_table


class PostgresSiteSettingRepository(SiteSettingRepository):
    """PostgreSQL implementation of SiteSettingRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_key(self, key: str) -> Optional[SiteSetting]:
        """Find a setting row by key."""
        stmt = select(site_settings_table).where(site_settings_table.c.key == key)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_setting(row._asdict()) if row else None

    async def save(self, setting: SiteSetting) -> SiteSetting:
        """Upsert a setting row."""
        stmt = insert(site_settings_table).values(
            key=setting.key, value=setting.value, updated_at=setting.updated_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[site_settings_table.c.key],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return setting
