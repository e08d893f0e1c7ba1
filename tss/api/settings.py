"""Per-tenant settings endpoints."""

from fastapi import APIRouter, HTTPException, status

from tss.api.deps import StoreDep
from tss.schemas.setting import SettingRecord, SettingValue

router = APIRouter()


@router.get("/tenants/{tenant_id}/settings", response_model=dict[str, SettingRecord])
async def get_all_settings(tenant_id: int, store: StoreDep):
    """All settings of a tenant keyed by name."""
    return await store.get_all_by_tenant_id(tenant_id)


@router.get("/tenants/{tenant_id}/settings/{name}")
async def get_setting(tenant_id: int, name: str, store: StoreDep):
    value = await store.get(name, tenant_id)
    if value is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"name": name, "value": value}


@router.put("/tenants/{tenant_id}/settings/{name}")
async def add_setting(tenant_id: int, name: str, body: SettingValue, store: StoreDep):
    """Create or overwrite a setting."""
    setting_id = await store.add(name, body.value, tenant_id)
    if setting_id is False:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return {"id": setting_id, "name": name, "value": body.value}


@router.patch("/tenants/{tenant_id}/settings/{name}")
async def set_setting(tenant_id: int, name: str, body: SettingValue, store: StoreDep):
    """Change an existing setting. Missing settings are not created."""
    if not await store.set(name, body.value, tenant_id):
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"name": name, "value": body.value}


@router.delete("/tenants/{tenant_id}/settings/{name}")
async def delete_setting(tenant_id: int, name: str, store: StoreDep):
    if not await store.delete(name, tenant_id):
        raise HTTPException(status_code=404, detail="Setting not found")
    return {"deleted": True}
