"""create campaigns, upload_history, dashboard_settings

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    # ---------------------------------------------------------------------------
    # campaigns
    # Raw figures only; CPL, ROI and conversion rate are derived on read.
    # ---------------------------------------------------------------------------
    op.create_table(
        "campaigns",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, comment="active, paused, completed"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("spend", sa.Numeric(14, 2), nullable=False),
        sa.Column("leads_generated", sa.Integer(), nullable=False),
        sa.Column("conversions", sa.Integer(), nullable=False),
        sa.Column("revenue", sa.Numeric(14, 2), nullable=False),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('active', 'paused', 'completed')",
            name="ck_campaigns_status_allowed",
        ),
        sa.CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_campaigns_end_after_start",
        ),
        sa.CheckConstraint("spend >= 0", name="ck_campaigns_spend_non_negative"),
        sa.CheckConstraint("revenue >= 0", name="ck_campaigns_revenue_non_negative"),
        sa.CheckConstraint("leads_generated >= 0", name="ck_campaigns_leads_non_negative"),
        sa.CheckConstraint(
            "conversions >= 0 AND conversions <= leads_generated",
            name="ck_campaigns_conversions_within_leads",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_campaigns"),
    )
    op.create_index("ix_campaigns_start_date", "campaigns", ["start_date"])
    op.create_index("ix_campaigns_status", "campaigns", ["status"])
    op.create_index("ix_campaigns_created_at", "campaigns", ["created_at"])

    # ---------------------------------------------------------------------------
    # upload_history
    # Append-only import audit trail.
    # ---------------------------------------------------------------------------
    op.create_table(
        "upload_history",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("record_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, comment="success, failure, partial"),
        sa.Column("error_detail", sa.Text(), nullable=True),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint(
            "status IN ('success', 'failure', 'partial')",
            name="ck_upload_history_status_allowed",
        ),
        sa.CheckConstraint("record_count >= 0", name="ck_upload_history_record_count_non_negative"),
        sa.PrimaryKeyConstraint("id", name="pk_upload_history"),
    )
    op.create_index("ix_upload_history_uploaded_at", "upload_history", ["uploaded_at"])

    # ---------------------------------------------------------------------------
    # dashboard_settings
    # Single row, created on first save.
    # ---------------------------------------------------------------------------
    op.create_table(
        "dashboard_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "monthly_goal",
            sa.Numeric(14, 2),
            nullable=True,
            comment="Target revenue for the current month",
        ),
        sa.Column(
            "cpl_alert",
            sa.Numeric(14, 2),
            nullable=True,
            comment="Campaigns with a CPL above this value are flagged",
        ),
        sa.Column("total_budget", sa.Numeric(14, 2), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_dashboard_settings"),
    )


def downgrade() -> None:
    op.drop_table("dashboard_settings")
    op.drop_index("ix_upload_history_uploaded_at", table_name="upload_history")
    op.drop_table("upload_history")
    op.drop_index("ix_campaigns_created_at", table_name="campaigns")
    op.drop_index("ix_campaigns_status", table_name="campaigns")
    op.drop_index("ix_campaigns_start_date", table_name="campaigns")
    op.drop_table("campaigns")
