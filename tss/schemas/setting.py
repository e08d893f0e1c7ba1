"""Setting records and request schemas."""

from pydantic import BaseModel, ConfigDict


class SettingRecord(BaseModel):
    """Detached snapshot of a setting row, safe to keep in the cache."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    value: str
    tenant_id: int


class SettingValue(BaseModel):
    """PUT/PATCH /v1/tenants/{id}/settings/{name} request."""

    value: str
