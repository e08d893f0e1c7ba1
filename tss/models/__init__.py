"""Database models."""

from tss.models.setting import SETTING_OPTIONS, Setting
from tss.models.tenant import Tenant, TenantType

__all__ = ["Tenant", "TenantType", "Setting", "SETTING_OPTIONS"]
