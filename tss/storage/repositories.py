"""Repository functions for tenants and settings.

Writes are flushed, never committed: the session owner decides when the
unit of work ends.
"""

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tss.models import Setting, Tenant


async def list_tenants_except(db: AsyncSession, excluded_name: str) -> list[Tenant]:
    """All tenants whose name is not ``excluded_name``."""
    result = await db.execute(
        select(Tenant).where(Tenant.name != excluded_name).order_by(Tenant.id)
    )
    return list(result.scalars().all())


async def get_tenant_by_id(db: AsyncSession, tenant_id: int) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return result.scalar_one_or_none()


async def get_tenant_by_url_prefix(db: AsyncSession, url_prefix: str) -> Tenant | None:
    """Case-insensitive match on url_prefix."""
    result = await db.execute(
        select(Tenant).where(func.lower(Tenant.url_prefix) == url_prefix.lower())
    )
    return result.scalars().first()


async def get_tenant_by_name(db: AsyncSession, name: str) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.name == name))
    return result.scalar_one_or_none()


async def insert_tenant(
    db: AsyncSession, name: str, url_prefix: str, local_prefix: str | None
) -> int | None:
    """Insert a tenant row and return the generated id."""
    tenant = Tenant(name=name, url_prefix=url_prefix, local_prefix=local_prefix)
    db.add(tenant)
    await db.flush()
    return tenant.id


async def update_tenant(db: AsyncSession, tenant_id: int, values: dict) -> int:
    """Apply ``values`` to the tenant row, returning the affected-row count."""
    if not values:
        return 0
    result = await db.execute(
        update(Tenant).where(Tenant.id == tenant_id).values(**values)
    )
    await db.flush()
    return result.rowcount


async def get_setting(db: AsyncSession, name: str, tenant_id: int) -> Setting | None:
    """Find the unique setting for (name, tenant_id)."""
    result = await db.execute(
        select(Setting).where(
            Setting.name == name,
            Setting.tenant_id == tenant_id,
        )
    )
    return result.scalar_one_or_none()


async def list_settings_for_tenant(
    db: AsyncSession, tenant_id: int, exclude_names: list[str] | None = None
) -> list[Setting]:
    """All settings of a tenant, skipping names in ``exclude_names``."""
    stmt = select(Setting).where(Setting.tenant_id == tenant_id)
    if exclude_names:
        stmt = stmt.where(Setting.name.not_in(exclude_names))
    result = await db.execute(stmt.order_by(Setting.id))
    return list(result.scalars().all())


async def insert_setting(db: AsyncSession, name: str, value: str, tenant_id: int) -> int:
    """Insert a setting row and return the generated id."""
    setting = Setting(name=name, value=value, tenant_id=tenant_id)
    db.add(setting)
    await db.flush()
    return setting.id


async def update_setting_value(
    db: AsyncSession, name: str, tenant_id: int, value: str
) -> int:
    """Set the value of (name, tenant_id), returning the affected-row count."""
    result = await db.execute(
        update(Setting)
        .where(Setting.name == name, Setting.tenant_id == tenant_id)
        .values(value=value)
    )
    await db.flush()
    return result.rowcount


async def delete_setting(db: AsyncSession, name: str, tenant_id: int) -> int:
    """Delete (name, tenant_id), returning the affected-row count."""
    result = await db.execute(
        delete(Setting).where(Setting.name == name, Setting.tenant_id == tenant_id)
    )
    await db.flush()
    return result.rowcount
