"""Tenant records and request schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tss.models.tenant import TenantType


class TenantRecord(BaseModel):
    """Detached snapshot of a tenant row, safe to keep in the cache."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url_prefix: str
    local_prefix: str | None = None
    active: bool = True
    type: TenantType = TenantType.PARENT


class TenantUpdate(BaseModel):
    """Partial tenant update. Only fields that are set and not null are written."""

    id: int
    active: bool | None = None
    name: str | None = None
    url_prefix: str | None = None
    type: TenantType | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)


class RegisterTenantRequest(BaseModel):
    """POST /v1/tenants request."""

    name: str
    url_prefix: str
    local_prefix: str = ""


class UpdateTenantRequest(BaseModel):
    """PATCH /v1/tenants/{id} request - same fields as TenantUpdate minus id."""

    active: bool | None = None
    name: str | None = None
    url_prefix: str | None = None
    type: TenantType | None = None


class RegisterTenantResponse(BaseModel):
    tenant_id: int = Field(..., gt=0)
