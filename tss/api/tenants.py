"""Tenant endpoints - registration, lookup, partial update."""

from fastapi import APIRouter, HTTPException, status

from tss.api.deps import DirectoryDep
from tss.errors import (
    DuplicateTenantError,
    MalformedRequestError,
    TenantCreationError,
    TenantValidationError,
)
from tss.schemas.tenant import (
    RegisterTenantRequest,
    RegisterTenantResponse,
    TenantRecord,
    TenantUpdate,
    UpdateTenantRequest,
)

router = APIRouter()


def _not_found(detail: str = "Tenant not found") -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


@router.get("/tenants", response_model=list[TenantRecord])
async def list_tenants(directory: DirectoryDep):
    """List every tenant except the reserved default tenant."""
    return await directory.list_tenants()


@router.post(
    "/tenants",
    response_model=RegisterTenantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_tenant(body: RegisterTenantRequest, directory: DirectoryDep):
    """Register a new tenant."""
    try:
        tenant_id = await directory.register(body.name, body.url_prefix, body.local_prefix)
    except TenantValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.violations,
        )
    except DuplicateTenantError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except TenantCreationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )
    return {"tenant_id": tenant_id}


@router.get("/tenants/by-prefix/{url_prefix}", response_model=TenantRecord)
async def get_tenant_by_url_prefix(url_prefix: str, directory: DirectoryDep):
    tenant = await directory.find_by_url_prefix(url_prefix)
    if tenant is None:
        raise _not_found()
    return tenant


@router.get("/tenants/by-name/{name}", response_model=TenantRecord)
async def get_tenant_by_name(name: str, directory: DirectoryDep):
    tenant = await directory.find_by_name(name)
    if tenant is None:
        raise _not_found()
    return tenant


@router.get("/tenants/{tenant_id}", response_model=TenantRecord)
async def get_tenant(tenant_id: int, directory: DirectoryDep):
    tenant = await directory.find_by_id(tenant_id)
    if tenant is None:
        raise _not_found()
    return tenant


@router.patch("/tenants/{tenant_id}")
async def update_tenant(
    tenant_id: int, body: UpdateTenantRequest, directory: DirectoryDep
):
    """Partially update a tenant. Only fields sent in the body are written."""
    fields = TenantUpdate(id=tenant_id, **body.model_dump(exclude_unset=True))
    try:
        updated = await directory.update(fields)
    except MalformedRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateTenantError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except TenantValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.violations,
        )
    return {"updated": updated}
