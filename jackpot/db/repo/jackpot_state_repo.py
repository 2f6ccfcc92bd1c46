from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jackpot.db.models.jackpot_state import JackpotState


class JackpotStateRepo:
    @staticmethod
    async def list_states(session: AsyncSession) -> list[JackpotState]:
        result = await session.execute(select(JackpotState))
        return list(result.scalars().all())

    @staticmethod
    async def get_by_tier(session: AsyncSession, tier: str) -> JackpotState | None:
        return await session.get(JackpotState, tier)

    @staticmethod
    async def get_by_tier_for_update(session: AsyncSession, tier: str) -> JackpotState | None:
        stmt = select(JackpotState).where(JackpotState.tier == tier).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create_initial_state(
        session: AsyncSession,
        *,
        tier: str,
        min_value: Decimal,
        max_value: Decimal,
        now_utc: datetime,
    ) -> JackpotState:
        state = JackpotState(
            tier=tier,
            current_value=min_value,
            min_value=min_value,
            max_value=max_value,
            cycle_start=now_utc,
            last_updated=now_utc,
        )
        session.add(state)
        await session.flush()
        return state
