"""Create users, applicants and currency_ledger tables

Revision ID: 5e0c1a7d9b42
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5e0c1a7d9b42"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Baseline schema for the assessment and currency rules engine."""

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # --- applicants ---
    op.create_table(
        "applicants",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("skill_track", sa.String(50), nullable=True),
        sa.Column("readiness_score", sa.Float, nullable=True),
        sa.Column("action_orientation", sa.Float, nullable=True),
        sa.Column("market_awareness", sa.Float, nullable=True),
        sa.Column("commitment_signal", sa.Float, nullable=True),
        sa.Column("tried_learning_skill", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("tried_online_earning", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("current_monthly_income", sa.Float, nullable=True),
        sa.Column("current_status", sa.String(20), nullable=True),
        sa.Column("technical_probe", sa.Text, nullable=True),
        sa.Column("commercial_probe", sa.Text, nullable=True),
        sa.Column("commitment_probe", sa.Text, nullable=True),
        sa.Column("exposure_probe", sa.Text, nullable=True),
        sa.Column("triad_technical", sa.Float, nullable=True),
        sa.Column("triad_soft", sa.Float, nullable=True),
        sa.Column("triad_commercial", sa.Float, nullable=True),
        sa.Column("offer_type", sa.String(20), nullable=True),
        sa.Column("receives_stipend", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("primary_focus", sa.String(20), nullable=True),
        sa.Column("kpi_targets", postgresql.JSONB, nullable=True),
        sa.Column("assessed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_applicants_offer_type", "applicants", ["offer_type"])

    # --- currency_ledger (append-only) ---
    op.create_table(
        "currency_ledger",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("currency_type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("reason", sa.Text, nullable=False, server_default=""),
        sa.Column("mission_id", sa.String(36), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_currency_ledger_user_type", "currency_ledger",
        ["user_id", "currency_type"],
    )
    op.create_index(
        "ix_currency_ledger_user_created", "currency_ledger",
        ["user_id", "created_at"],
    )


def downgrade() -> None:
    """Drop all rules-engine tables."""
    op.drop_index("ix_currency_ledger_user_created", table_name="currency_ledger")
    op.drop_index("ix_currency_ledger_user_type", table_name="currency_ledger")
    op.drop_table("currency_ledger")
    op.drop_index("ix_applicants_offer_type", table_name="applicants")
    op.drop_table("applicants")
    op.drop_table("users")
