"""Tests for the per-tenant settings store."""

import pytest
from sqlalchemy import func, select

from tss.cache import settings_namespace
from tss.models import Setting
from tss.schemas.setting import SettingRecord
from tss.storage import repositories


async def _count(db, name, tenant_id):
    result = await db.execute(
        select(func.count())
        .select_from(Setting)
        .where(Setting.name == name, Setting.tenant_id == tenant_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_settings_lifecycle(directory, store):
    """register -> add -> get -> set -> get -> delete -> get."""
    tenant_id = await directory.register("acme", "acme", "acme")
    assert tenant_id == 1

    assert await store.add("theme", "dark", tenant_id)
    assert await store.get("theme", tenant_id) == "dark"
    assert await store.set("theme", "light", tenant_id) is True
    assert await store.get("theme", tenant_id) == "light"
    assert await store.delete("theme", tenant_id) is True
    assert await store.get("theme", tenant_id) is None


@pytest.mark.asyncio
async def test_add_unknown_tenant(store):
    assert await store.add("theme", "dark", 77) is False


@pytest.mark.asyncio
async def test_add_twice_updates_single_row(db, store, acme_id):
    first = await store.add("voice", "man", acme_id)
    second = await store.add("voice", "woman", acme_id)
    assert first == second
    assert await store.get("voice", acme_id) == "woman"
    assert await _count(db, "voice", acme_id) == 1


@pytest.mark.asyncio
async def test_add_caches_full_record(store, cache, acme_id):
    setting_id = await store.add("theme", "dark", acme_id)
    cached = cache.get("theme", settings_namespace(acme_id))
    assert cached == SettingRecord(id=setting_id, name="theme", value="dark", tenant_id=acme_id)


@pytest.mark.asyncio
async def test_settings_are_scoped_per_tenant(directory, store, acme_id):
    other = await directory.register("other", "other", "other")
    await store.add("theme", "dark", acme_id)
    await store.add("theme", "light", other)
    assert await store.get("theme", acme_id) == "dark"
    assert await store.get("theme", other) == "light"


@pytest.mark.asyncio
async def test_get_populates_cache(db, store, cache, acme_id):
    await repositories.insert_setting(db, "from_email", "ops@acme.test", acme_id)
    assert cache.get("from_email", settings_namespace(acme_id)) is None

    assert await store.get("from_email", acme_id) == "ops@acme.test"
    assert cache.get("from_email", settings_namespace(acme_id)).value == "ops@acme.test"


@pytest.mark.asyncio
async def test_get_missing(store, acme_id):
    assert await store.get("nope", acme_id) is None


@pytest.mark.asyncio
async def test_set_missing_creates_nothing(db, store, acme_id):
    assert await store.set("theme", "dark", acme_id) is False
    assert await _count(db, "theme", acme_id) == 0
    assert await store.get("theme", acme_id) is None


@pytest.mark.asyncio
async def test_set_drops_cache_entry(store, cache, acme_id):
    await store.add("theme", "dark", acme_id)
    await store.set("theme", "light", acme_id)
    assert cache.get("theme", settings_namespace(acme_id)) is None


@pytest.mark.asyncio
async def test_delete_missing(store, acme_id):
    assert await store.delete("theme", acme_id) is False


@pytest.mark.asyncio
async def test_delete_removes_row_and_cache(db, store, cache, acme_id):
    await store.add("theme", "dark", acme_id)
    assert await store.delete("theme", acme_id) is True
    assert await _count(db, "theme", acme_id) == 0
    assert cache.get("theme", settings_namespace(acme_id)) is None


@pytest.mark.asyncio
async def test_get_all_cold_cache(db, store, cache, acme_id):
    await store.add("theme", "dark", acme_id)
    await store.add("voice", "man", acme_id)
    await store.add("gravatars", "1", acme_id)
    await store.delete("gravatars", acme_id)
    cache.flush(settings_namespace(acme_id))

    settings = await store.get_all_by_tenant_id(acme_id)
    assert set(settings) == {"theme", "voice"}
    assert settings["voice"].value == "man"
    assert set(cache.group(settings_namespace(acme_id))) == {"theme", "voice"}


@pytest.mark.asyncio
async def test_get_all_warm_cache(store, acme_id):
    await store.add("theme", "dark", acme_id)
    await store.add("voice", "man", acme_id)
    settings = await store.get_all_by_tenant_id(acme_id)
    assert set(settings) == {"theme", "voice"}
    assert settings["theme"].value == "dark"


@pytest.mark.asyncio
async def test_get_all_partially_cached(db, store, cache, acme_id):
    await store.add("theme", "dark", acme_id)
    await repositories.insert_setting(db, "voice", "man", acme_id)

    settings = await store.get_all_by_tenant_id(acme_id)
    assert set(settings) == {"theme", "voice"}


@pytest.mark.asyncio
async def test_get_all_skips_cached_names(store, cache, acme_id, monkeypatch):
    await store.add("theme", "dark", acme_id)
    seen = {}
    original = repositories.list_settings_for_tenant

    async def spy(db, tenant_id, exclude_names=None):
        seen["exclude"] = exclude_names
        return await original(db, tenant_id, exclude_names=exclude_names)

    monkeypatch.setattr(repositories, "list_settings_for_tenant", spy)
    await store.get_all_by_tenant_id(acme_id)
    assert seen["exclude"] == ["theme"]


@pytest.mark.asyncio
async def test_get_all_after_cache_expiry(store, clock, acme_id):
    await store.add("theme", "dark", acme_id)
    await store.add("voice", "man", acme_id)
    clock.advance(5)
    assert set(await store.get_all_by_tenant_id(acme_id)) == {"theme", "voice"}


@pytest.mark.asyncio
async def test_get_all_unknown_tenant(store):
    assert await store.get_all_by_tenant_id(404) == {}
