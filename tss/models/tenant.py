"""Tenant model."""

from enum import IntEnum

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tss.database import Base


class TenantType(IntEnum):
    """Account type of a tenant. Passed through, never interpreted here."""

    PARENT = 0
    FULL = 1  # reserved, not used yet
    SUBACCOUNT = 2
    CONNECT = 3


class Tenant(Base):
    """Tenant table - one row per registered sub-organization."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    url_prefix: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    local_prefix: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    type: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(TenantType.PARENT)
    )
