from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal

import structlog

from jackpot.economy.progression.rules import advance_jackpot, to_money
from jackpot.economy.progression.types import JackpotSnapshot, TickOutcome
from jackpot.economy.tiers import Tier
from jackpot.store.errors import StoreUnavailableError
from jackpot.store.ports import JackpotStateStore

logger = structlog.get_logger(__name__)


class JackpotService:
    @staticmethod
    async def initialize(
        store: JackpotStateStore,
        *,
        tier: Tier,
        min_value: Decimal,
        max_value: Decimal,
        now_utc: datetime,
    ) -> bool:
        """Creates the tier's state at ``min_value``; live state is never overwritten."""
        min_value = to_money(min_value)
        max_value = to_money(max_value)
        if min_value < 0:
            raise ValueError("min_value must not be negative")
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")

        created = await store.create_jackpot_if_missing(
            JackpotSnapshot(
                tier=tier,
                current=min_value,
                min_value=min_value,
                max_value=max_value,
                cycle_start=now_utc,
                last_updated=now_utc,
            )
        )
        if created:
            logger.info(
                "jackpot_initialized",
                tier=tier.value,
                min_value=str(min_value),
                max_value=str(max_value),
            )
        return created

    @staticmethod
    async def initialize_defaults(
        store: JackpotStateStore,
        *,
        ranges: Mapping[Tier, tuple[Decimal, Decimal]],
        now_utc: datetime,
    ) -> dict[Tier, bool]:
        created: dict[Tier, bool] = {}
        for tier in Tier:
            min_value, max_value = ranges[tier]
            created[tier] = await JackpotService.initialize(
                store,
                tier=tier,
                min_value=min_value,
                max_value=max_value,
                now_utc=now_utc,
            )
        return created

    @staticmethod
    async def _tick_tier(store: JackpotStateStore, tier: Tier, now_utc: datetime) -> TickOutcome:
        reset = False

        def _advance(snapshot: JackpotSnapshot) -> JackpotSnapshot:
            nonlocal reset
            updated, reset = advance_jackpot(snapshot, now_utc=now_utc)
            return updated

        updated = await store.update_jackpot(tier, _advance)
        if updated is None:
            return TickOutcome.MISSING
        if reset:
            logger.info("jackpot_cycle_reset", tier=tier.value, current=str(updated.current))
            return TickOutcome.RESET
        return TickOutcome.ADVANCED

    @staticmethod
    async def tick(store: JackpotStateStore, *, now_utc: datetime) -> dict[Tier, TickOutcome]:
        """Advances every tier independently; one tier failing leaves the others ticking."""
        outcomes: dict[Tier, TickOutcome] = {}
        for tier in Tier:
            try:
                outcomes[tier] = await JackpotService._tick_tier(store, tier, now_utc)
            except StoreUnavailableError:
                logger.exception("jackpot_tick_failed", tier=tier.value)
                outcomes[tier] = TickOutcome.FAILED
        return outcomes

    @staticmethod
    async def snapshot(store: JackpotStateStore) -> dict[Tier, JackpotSnapshot]:
        return await store.list_jackpots()
