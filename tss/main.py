"""TSS FastAPI application."""

import logging

from fastapi import FastAPI

from tss.api.health import router as health_router
from tss.api.settings import router as settings_router
from tss.api.tenants import router as tenants_router
from tss.cache import MemoryCache
from tss.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TSS - Tenant Settings Service",
    description="Multi-tenant key/value settings with tenant registration and lookup",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.cache = MemoryCache(ttl=settings.cache_ttl_seconds)

app.include_router(health_router, tags=["Health"])
app.include_router(tenants_router, prefix="/v1", tags=["Tenants"])
app.include_router(settings_router, prefix="/v1", tags=["Settings"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "TSS", "version": "0.1.0", "docs": "/docs"}
