"""Initial schema - tenants, settings, reserved default tenant.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    tenants = op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), unique=True, nullable=False),
        sa.Column("url_prefix", sa.String(32), unique=True, nullable=False),
        sa.Column("local_prefix", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("type", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False, server_default=""),
        sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
    )
    op.create_unique_constraint(
        "uq_settings_name_tenant",
        "settings",
        ["name", "tenant_id"],
    )

    # Reserved tenant, hidden from tenant listings
    op.bulk_insert(
        tenants,
        [{"name": "default", "url_prefix": "", "local_prefix": "", "active": True, "type": 0}],
    )


def downgrade() -> None:
    op.drop_constraint("uq_settings_name_tenant", "settings", type_="unique")
    op.drop_table("settings")
    op.drop_table("tenants")
