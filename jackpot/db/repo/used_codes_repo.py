from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from jackpot.db.models.used_codes import UsedCode


class UsedCodesRepo:
    @staticmethod
    async def get_by_code(session: AsyncSession, code: str) -> UsedCode | None:
        return await session.get(UsedCode, code)

    @staticmethod
    async def create(session: AsyncSession, *, code: str, now_utc: datetime) -> UsedCode:
        used_code = UsedCode(code=code, used_at=now_utc)
        session.add(used_code)
        await session.flush()
        return used_code

    @staticmethod
    async def delete_all(session: AsyncSession) -> int:
        result = await session.execute(delete(UsedCode))
        return int(getattr(result, "rowcount", 0) or 0)
