"""Settings store - per-tenant key/value settings behind a short-lived cache."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tss.cache import CacheBackend, settings_namespace
from tss.schemas.setting import SettingRecord
from tss.services.directory import TenantDirectory
from tss.storage import repositories

logger = logging.getLogger(__name__)


class SettingsStore:
    """Get, add, set and delete settings of a tenant.

    Every cache entry in ``settings-{tenant_id}`` is a full SettingRecord
    keyed by setting name.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheBackend,
        directory: TenantDirectory | None = None,
    ):
        self.db = db
        self.cache = cache
        self.directory = directory or TenantDirectory(db, cache)

    async def _lookup(self, name: str, tenant_id: int) -> SettingRecord | None:
        namespace = settings_namespace(tenant_id)
        cached = self.cache.get(name, namespace)
        if cached is not None:
            return cached

        setting = await repositories.get_setting(self.db, name, tenant_id)
        if setting is None:
            return None
        record = SettingRecord.model_validate(setting)
        self.cache.set(name, record, namespace)
        return record

    async def get(self, name: str, tenant_id: int) -> str | None:
        """Value of the setting, or None if the tenant has no such setting."""
        record = await self._lookup(name, tenant_id)
        return None if record is None else record.value

    async def add(self, name: str, value: str, tenant_id: int) -> int | bool:
        """Insert or update a setting.

        Returns the setting id, or False when the tenant is unknown.
        """
        if await self.directory.find_by_id(tenant_id) is None:
            return False

        existing = await self._lookup(name, tenant_id)
        if existing is not None:
            await repositories.update_setting_value(self.db, name, tenant_id, value)
            setting_id = existing.id
        else:
            setting_id = await repositories.insert_setting(self.db, name, value, tenant_id)

        record = SettingRecord(id=setting_id, name=name, value=value, tenant_id=tenant_id)
        self.cache.set(name, record, settings_namespace(tenant_id))
        logger.info("Stored setting %s for tenant %s", name, tenant_id)
        return setting_id

    async def set(self, name: str, value: str, tenant_id: int) -> bool:
        """Update an existing setting. Never creates one."""
        if await self._lookup(name, tenant_id) is None:
            return False

        affected = await repositories.update_setting_value(self.db, name, tenant_id, value)
        self.cache.delete(name, settings_namespace(tenant_id))
        logger.info("Updated setting %s for tenant %s", name, tenant_id)
        return affected > 0

    async def delete(self, name: str, tenant_id: int) -> bool:
        if await self._lookup(name, tenant_id) is None:
            return False

        affected = await repositories.delete_setting(self.db, name, tenant_id)
        self.cache.delete(name, settings_namespace(tenant_id))
        logger.info("Deleted setting %s for tenant %s", name, tenant_id)
        return affected > 0

    async def get_all_by_tenant_id(self, tenant_id: int) -> dict[str, SettingRecord]:
        """Every setting of a tenant keyed by name.

        Names already cached are not fetched again; the rest are read from the
        store and cached. The result is the cached entries plus the fetched ones.
        """
        namespace = settings_namespace(tenant_id)
        known = self.cache.group(namespace)

        fetched = await repositories.list_settings_for_tenant(
            self.db, tenant_id, exclude_names=list(known)
        )
        settings = dict(known)
        for setting in fetched:
            record = SettingRecord.model_validate(setting)
            self.cache.set(record.name, record, namespace)
            settings[record.name] = record

        logger.debug(
            "Settings for tenant %s: %d cached, %d fetched", tenant_id, len(known), len(fetched)
        )
        return settings
