"""Tenant directory - registration and cached lookups of tenants."""

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from tss.cache import TENANTS_NAMESPACE, CacheBackend
from tss.errors import (
    DuplicateTenantError,
    MalformedRequestError,
    TenantCreationError,
    TenantValidationError,
)
from tss.schemas.tenant import TenantRecord, TenantUpdate
from tss.storage import repositories

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[0-9A-Za-z_-]+$")


class TenantDirectory:
    """Create, list and look up tenants.

    Lookups by id and url prefix go through the ``tenants`` cache namespace,
    keyed by tenant id. Any write flushes the whole namespace.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheBackend,
        *,
        default_tenant_name: str = "default",
        url_prefix_max_length: int = 32,
    ):
        self.db = db
        self.cache = cache
        self.default_tenant_name = default_tenant_name
        self.url_prefix_max_length = url_prefix_max_length

    def _remember(self, tenant) -> TenantRecord:
        record = TenantRecord.model_validate(tenant)
        self.cache.set(record.id, record, TENANTS_NAMESPACE)
        return record

    def _violations(self, name: str | None, url_prefix: str | None) -> list[str]:
        errors = []
        if url_prefix is not None and len(url_prefix) > self.url_prefix_max_length:
            errors.append(
                f"Tenant url prefix exceeds {self.url_prefix_max_length} character limit"
            )
        if name is not None and not NAME_PATTERN.match(name):
            errors.append(
                "Tenant name contains invalid characters. "
                "Allowed characters: alphanumeric, dashes, and underscores."
            )
        return errors

    async def list_tenants(self) -> list[TenantRecord]:
        """Every tenant except the reserved default one. Warms the cache."""
        tenants = await repositories.list_tenants_except(self.db, self.default_tenant_name)
        return [self._remember(t) for t in tenants]

    async def find_by_url_prefix(self, url_prefix: str) -> TenantRecord | None:
        wanted = url_prefix.lower()
        for cached in self.cache.group(TENANTS_NAMESPACE).values():
            if cached.url_prefix.lower() == wanted:
                logger.debug("Tenant cache hit for url prefix %s", url_prefix)
                return cached

        tenant = await repositories.get_tenant_by_url_prefix(self.db, wanted)
        if tenant is None:
            return None
        return self._remember(tenant)

    async def find_by_id(self, tenant_id: int) -> TenantRecord | None:
        cached = self.cache.get(tenant_id, TENANTS_NAMESPACE)
        if cached is not None:
            logger.debug("Tenant cache hit for id %s", tenant_id)
            return cached

        tenant = await repositories.get_tenant_by_id(self.db, tenant_id)
        if tenant is None:
            return None
        return self._remember(tenant)

    async def find_by_name(self, name: str) -> TenantRecord | None:
        """Uncached lookup by display name."""
        tenant = await repositories.get_tenant_by_name(self.db, name)
        if tenant is None:
            return None
        return TenantRecord.model_validate(tenant)

    async def register(self, name: str, url_prefix: str, local_prefix: str | None) -> int:
        """Add a new tenant and return its id.

        Raises:
            TenantValidationError: name or url prefix breaks the naming rules.
            DuplicateTenantError: the url prefix is already registered.
            TenantCreationError: the store did not assign an id.
        """
        errors = self._violations(name, url_prefix)
        if errors:
            logger.warning("Rejected tenant %r: %s", name, "; ".join(errors))
            raise TenantValidationError(errors)

        if (
            await self.find_by_url_prefix(url_prefix) is not None
            or await self.find_by_name(name) is not None
        ):
            raise DuplicateTenantError("Tenant by this name or url already exists")

        tenant_id = await repositories.insert_tenant(self.db, name, url_prefix, local_prefix)
        if not tenant_id:
            raise TenantCreationError("Tenant failed to create")

        self.cache.flush(TENANTS_NAMESPACE)
        logger.info("Registered tenant %s (id=%s, url_prefix=%s)", name, tenant_id, url_prefix)
        return tenant_id

    async def update(self, fields: TenantUpdate | Mapping[str, Any]) -> bool:
        """Apply a partial update to an existing tenant.

        Only ``active``, ``name``, ``url_prefix`` and ``type`` are written, and
        only when present. Returns whether the store reports the row updated.
        """
        if not isinstance(fields, TenantUpdate):
            try:
                fields = TenantUpdate.model_validate(fields or {})
            except ValidationError as e:
                raise MalformedRequestError(
                    "Can not update tenant, malformed update request"
                ) from e

        if fields.id <= 0 or await self.find_by_id(fields.id) is None:
            raise MalformedRequestError("Can not update tenant, malformed update request")

        errors = self._violations(fields.name, fields.url_prefix)
        if errors:
            logger.warning("Rejected update of tenant %s: %s", fields.id, "; ".join(errors))
            raise TenantValidationError(errors)

        changes = fields.changes()
        if "url_prefix" in changes:
            holder = await self.find_by_url_prefix(changes["url_prefix"])
            if holder is not None and holder.id != fields.id:
                raise DuplicateTenantError("Tenant by this name or url already exists")
        if "name" in changes:
            holder = await self.find_by_name(changes["name"])
            if holder is not None and holder.id != fields.id:
                raise DuplicateTenantError("Tenant by this name or url already exists")
        if "type" in changes:
            changes["type"] = int(changes["type"])

        self.cache.flush(TENANTS_NAMESPACE)
        updated = await repositories.update_tenant(self.db, fields.id, changes)
        logger.info("Updated tenant %s fields=%s", fields.id, sorted(changes))
        return updated > 0
