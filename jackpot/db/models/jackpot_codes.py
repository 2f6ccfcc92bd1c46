from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from jackpot.db.models.base import Base


class JackpotCode(Base):
    __tablename__ = "jackpot_codes"
    __table_args__ = (
        CheckConstraint(
            "tier IN ('mini','minor','mega','grand')",
            name="ck_jackpot_codes_tier",
        ),
        CheckConstraint("length(code) > 0", name="ck_jackpot_codes_code_not_empty"),
        UniqueConstraint("code", name="uq_jackpot_codes_code"),
        Index("idx_jackpot_codes_tier", "tier"),
    )

    # SQLite only auto-increments INTEGER PRIMARY KEY columns.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    code: Mapped[str] = mapped_column(String(64), nullable=False)
    tier: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
