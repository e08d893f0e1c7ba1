"""Errors raised by the tenant directory and settings store.

Lookups that find nothing are not errors: they return ``None`` (or ``False``
for mutations). Only rejected requests raise.
"""


class SettingsError(Exception):
    """Base class for rejected tenant/settings requests."""


class TenantValidationError(SettingsError):
    """One or more tenant fields break the naming rules."""

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(",".join(self.violations))


class DuplicateTenantError(SettingsError):
    """A tenant already owns the requested url prefix."""


class MalformedRequestError(SettingsError):
    """Update request does not target an existing tenant."""


class TenantCreationError(SettingsError):
    """The store did not assign an id to a new tenant."""
