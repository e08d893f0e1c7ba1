"""Request-scoped service construction."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tss.cache import CacheBackend, get_cache
from tss.config import settings
from tss.database import get_db
from tss.services.directory import TenantDirectory
from tss.services.store import SettingsStore


def get_directory(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheBackend, Depends(get_cache)],
) -> TenantDirectory:
    """Tenant directory bound to this request's session and the shared cache."""
    return TenantDirectory(
        db,
        cache,
        default_tenant_name=settings.default_tenant_name,
        url_prefix_max_length=settings.url_prefix_max_length,
    )


def get_store(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheBackend, Depends(get_cache)],
    directory: Annotated[TenantDirectory, Depends(get_directory)],
) -> SettingsStore:
    return SettingsStore(db, cache, directory)


# Type aliases for dependency injection
DirectoryDep = Annotated[TenantDirectory, Depends(get_directory)]
StoreDep = Annotated[SettingsStore, Depends(get_store)]
