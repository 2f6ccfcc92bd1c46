from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from jackpot.db.models.base import Base


class UsedCode(Base):
    __tablename__ = "used_codes"
    __table_args__ = (Index("idx_used_codes_used_at", "used_at"),)

    code: Mapped[str] = mapped_column(String(64), primary_key=True)
    used_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
