from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from jackpot.db.models.base import Base


class JackpotState(Base):
    __tablename__ = "jackpot_state"
    __table_args__ = (
        CheckConstraint(
            "tier IN ('mini','minor','mega','grand')",
            name="ck_jackpot_state_tier",
        ),
        CheckConstraint("min_value >= 0", name="ck_jackpot_state_min_non_negative"),
        CheckConstraint("min_value <= max_value", name="ck_jackpot_state_range"),
        CheckConstraint(
            "current_value >= min_value AND current_value <= max_value",
            name="ck_jackpot_state_current_in_range",
        ),
    )

    tier: Mapped[str] = mapped_column(String(16), primary_key=True)
    current_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    min_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    max_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    cycle_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
