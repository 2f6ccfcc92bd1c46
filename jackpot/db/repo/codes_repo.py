from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from jackpot.db.models.jackpot_codes import JackpotCode


class CodesRepo:
    @staticmethod
    async def list_codes(session: AsyncSession) -> list[JackpotCode]:
        stmt = select(JackpotCode).order_by(JackpotCode.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_tier_by_code(session: AsyncSession, code: str) -> str | None:
        stmt = select(JackpotCode.tier).where(JackpotCode.code == code)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        code: str,
        tier: str,
        now_utc: datetime,
    ) -> JackpotCode:
        jackpot_code = JackpotCode(code=code, tier=tier, created_at=now_utc)
        session.add(jackpot_code)
        await session.flush()
        return jackpot_code

    @staticmethod
    async def delete_all(session: AsyncSession) -> int:
        result = await session.execute(delete(JackpotCode))
        return int(getattr(result, "rowcount", 0) or 0)
