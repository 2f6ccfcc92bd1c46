from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jackpot.core.clock import ensure_utc
from jackpot.db.models.jackpot_state import JackpotState
from jackpot.db.repo.codes_repo import CodesRepo
from jackpot.db.repo.jackpot_state_repo import JackpotStateRepo
from jackpot.db.repo.used_codes_repo import UsedCodesRepo
from jackpot.economy.progression.types import JackpotSnapshot
from jackpot.economy.tiers import Tier
from jackpot.store.errors import CodeConflictError, StoreUnavailableError
from jackpot.store.ports import JackpotAdvance

STORE_FAILURES = (SQLAlchemyError, OSError)


def _snapshot_from_model(state: JackpotState) -> JackpotSnapshot:
    return JackpotSnapshot(
        tier=Tier(state.tier),
        current=state.current_value,
        min_value=state.min_value,
        max_value=state.max_value,
        cycle_start=ensure_utc(state.cycle_start),
        last_updated=ensure_utc(state.last_updated),
    )


def _apply_snapshot_to_model(state: JackpotState, snapshot: JackpotSnapshot) -> None:
    state.current_value = snapshot.current
    state.cycle_start = snapshot.cycle_start
    state.last_updated = snapshot.last_updated


class SqlStore:
    """Transactional store; every call runs in its own session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def ping(self) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("ping failed") from exc

    async def list_codes(self) -> dict[Tier, list[str]]:
        grouped: dict[Tier, list[str]] = {tier: [] for tier in Tier}
        try:
            async with self._session_factory() as session:
                rows = await CodesRepo.list_codes(session)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("list_codes failed") from exc

        for row in rows:
            grouped[Tier(row.tier)].append(row.code)
        return grouped

    async def find_tier(self, code: str) -> Tier | None:
        try:
            async with self._session_factory() as session:
                tier = await CodesRepo.get_tier_by_code(session, code)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("find_tier failed") from exc
        return None if tier is None else Tier(tier)

    async def insert_code(self, *, tier: Tier, code: str, now_utc: datetime) -> None:
        try:
            async with self._session_factory.begin() as session:
                await CodesRepo.create(session, code=code, tier=tier.value, now_utc=now_utc)
        except IntegrityError as exc:
            raise CodeConflictError(code) from exc
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("insert_code failed") from exc

    async def is_used(self, code: str) -> bool:
        try:
            async with self._session_factory() as session:
                used_code = await UsedCodesRepo.get_by_code(session, code)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("is_used failed") from exc
        return used_code is not None

    async def insert_used(self, *, code: str, now_utc: datetime) -> None:
        try:
            async with self._session_factory.begin() as session:
                await UsedCodesRepo.create(session, code=code, now_utc=now_utc)
        except IntegrityError as exc:
            raise CodeConflictError(code) from exc
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("insert_used failed") from exc

    async def clear_codes(self) -> None:
        try:
            async with self._session_factory.begin() as session:
                await UsedCodesRepo.delete_all(session)
                await CodesRepo.delete_all(session)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("clear_codes failed") from exc

    async def list_jackpots(self) -> dict[Tier, JackpotSnapshot]:
        try:
            async with self._session_factory() as session:
                states = await JackpotStateRepo.list_states(session)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("list_jackpots failed") from exc
        snapshots = {Tier(state.tier): _snapshot_from_model(state) for state in states}
        return {tier: snapshots[tier] for tier in Tier if tier in snapshots}

    async def create_jackpot_if_missing(self, snapshot: JackpotSnapshot) -> bool:
        try:
            async with self._session_factory.begin() as session:
                existing = await JackpotStateRepo.get_by_tier(session, snapshot.tier.value)
                if existing is not None:
                    return False
                await JackpotStateRepo.create_initial_state(
                    session,
                    tier=snapshot.tier.value,
                    min_value=snapshot.min_value,
                    max_value=snapshot.max_value,
                    now_utc=snapshot.cycle_start,
                )
        except IntegrityError:
            # Another process created the row between our read and insert.
            return False
        except STORE_FAILURES as exc:
            raise StoreUnavailableError("create_jackpot_if_missing failed") from exc
        return True

    async def update_jackpot(self, tier: Tier, advance: JackpotAdvance) -> JackpotSnapshot | None:
        try:
            async with self._session_factory.begin() as session:
                state = await JackpotStateRepo.get_by_tier_for_update(session, tier.value)
                if state is None:
                    return None
                updated = advance(_snapshot_from_model(state))
                _apply_snapshot_to_model(state, updated)
        except STORE_FAILURES as exc:
            raise StoreUnavailableError(f"update_jackpot failed for tier {tier.value}") from exc
        return updated
