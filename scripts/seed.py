#!/usr/bin/env python3
"""
Seed script: registers a demo tenant and gives it a default set of settings.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tss.cache import MemoryCache
from tss.config import settings
from tss.database import async_session_maker
from tss.services.directory import TenantDirectory
from tss.services.store import SettingsStore

TENANT_NAME = "demo"
TENANT_URL_PREFIX = "demo"

DEFAULT_SETTINGS = {
    "theme": "default",
    "transcriptions": "1",
    "voice": "man",
    "voice_language": "en",
    "numbers_country": "US",
    "gravatars": "0",
}


async def seed():
    cache = MemoryCache(ttl=settings.cache_ttl_seconds)

    async with async_session_maker() as session:
        directory = TenantDirectory(
            session,
            cache,
            default_tenant_name=settings.default_tenant_name,
            url_prefix_max_length=settings.url_prefix_max_length,
        )
        store = SettingsStore(session, cache, directory)

        tenant = await directory.find_by_url_prefix(TENANT_URL_PREFIX)
        if tenant:
            tenant_id = tenant.id
            print("Tenant already exists, using existing.")
        else:
            tenant_id = await directory.register(TENANT_NAME, TENANT_URL_PREFIX, TENANT_URL_PREFIX)

        for name, value in DEFAULT_SETTINGS.items():
            await store.add(name, value, tenant_id)
        await session.commit()

    print("Seed complete!")
    print(f"Tenant id: {tenant_id}")
    print(f"Example: curl http://localhost:8000/v1/tenants/{tenant_id}/settings")


if __name__ == "__main__":
    asyncio.run(seed())
