"""jackpot_core_tables

Revision ID: 3c1f0a9d7e21
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3c1f0a9d7e21"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "jackpot_codes",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("tier", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("tier IN ('mini','minor','mega','grand')", name="ck_jackpot_codes_tier"),
        sa.CheckConstraint("length(code) > 0", name="ck_jackpot_codes_code_not_empty"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_jackpot_codes_code"),
    )
    op.create_index("idx_jackpot_codes_tier", "jackpot_codes", ["tier"])

    op.create_table(
        "used_codes",
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("code"),
    )
    op.create_index("idx_used_codes_used_at", "used_codes", ["used_at"])

    op.create_table(
        "jackpot_state",
        sa.Column("tier", sa.String(length=16), nullable=False),
        sa.Column("current_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("min_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("max_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("cycle_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("tier IN ('mini','minor','mega','grand')", name="ck_jackpot_state_tier"),
        sa.CheckConstraint("min_value >= 0", name="ck_jackpot_state_min_non_negative"),
        sa.CheckConstraint("min_value <= max_value", name="ck_jackpot_state_range"),
        sa.CheckConstraint(
            "current_value >= min_value AND current_value <= max_value",
            name="ck_jackpot_state_current_in_range",
        ),
        sa.PrimaryKeyConstraint("tier"),
    )


def downgrade() -> None:
    op.drop_table("jackpot_state")
    op.drop_index("idx_used_codes_used_at", table_name="used_codes")
    op.drop_table("used_codes")
    op.drop_index("idx_jackpot_codes_tier", table_name="jackpot_codes")
    op.drop_table("jackpot_codes")
