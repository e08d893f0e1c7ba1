"""Setting model."""

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tss.database import Base

# Names the application layer knows how to use. Not enforced by the store.
SETTING_OPTIONS = (
    "twilio_sid",
    "twilio_token",
    "application_sid",
    "twilio_endpoint",
    "from_email",
    "recording_host",
    "theme",
    "transcriptions",
    "voice",
    "voice_language",
    "numbers_country",
    "gravatars",
)


class Setting(Base):
    """Per-tenant key/value setting, unique by (name, tenant_id)."""

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tenants.id"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("name", "tenant_id", name="uq_settings_name_tenant"),
    )
