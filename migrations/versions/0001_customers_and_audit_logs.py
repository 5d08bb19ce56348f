"""customers and audit_logs

Revision ID: 0001
Revises:
Create Date: 2026-10-16
"""

import sqlalchemy as sa
from alembic import op


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

TIERS = ("standard", "gold", "platinum")
ACTIONS = (
    "customer_created",
    "customer_updated",
    "customer_deleted",
    "points_added",
    "points_redeemed",
    "tier_changed",
)


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(32), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "points_redeemed", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "tier",
            sa.Enum(*TIERS, name="tier_enum", create_constraint=True),
            nullable=False,
            server_default="standard",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_customers_phone", "customers", ["phone"], unique=True)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "action_type",
            sa.Enum(*ACTIONS, name="audit_action_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Uuid(),
            sa.ForeignKey("customers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("customer_ref", sa.Uuid(), nullable=True),
        sa.Column("customer_name", sa.String(100), nullable=False),
        sa.Column("points_change", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_audit_logs_action_type", "audit_logs", ["action_type"])
    op.create_index("ix_audit_logs_customer_ref", "audit_logs", ["customer_ref"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("customers")
    sa.Enum(name="audit_action_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="tier_enum").drop(op.get_bind(), checkfirst=True)
