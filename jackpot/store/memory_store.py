from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime

from jackpot.economy.progression.types import JackpotSnapshot
from jackpot.economy.tiers import Tier
from jackpot.store.errors import CodeConflictError
from jackpot.store.ports import JackpotAdvance


class MemoryStore:
    """Process-local store. State is lost on restart."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._codes: dict[Tier, list[str]] = {tier: [] for tier in Tier}
        self._used: dict[str, datetime] = {}
        self._jackpots: dict[Tier, JackpotSnapshot] = {}

    async def ping(self) -> None:
        return None

    async def list_codes(self) -> dict[Tier, list[str]]:
        return {tier: list(codes) for tier, codes in self._codes.items()}

    async def find_tier(self, code: str) -> Tier | None:
        for tier in Tier:
            if code in self._codes[tier]:
                return tier
        return None

    async def insert_code(self, *, tier: Tier, code: str, now_utc: datetime) -> None:
        async with self._lock:
            if any(code in codes for codes in self._codes.values()):
                raise CodeConflictError(code)
            self._codes[tier].append(code)

    async def is_used(self, code: str) -> bool:
        return code in self._used

    async def insert_used(self, *, code: str, now_utc: datetime) -> None:
        async with self._lock:
            if code in self._used:
                raise CodeConflictError(code)
            self._used[code] = now_utc

    async def clear_codes(self) -> None:
        async with self._lock:
            self._codes = {tier: [] for tier in Tier}
            self._used = {}

    async def list_jackpots(self) -> dict[Tier, JackpotSnapshot]:
        return {tier: replace(snapshot) for tier, snapshot in self._jackpots.items()}

    async def create_jackpot_if_missing(self, snapshot: JackpotSnapshot) -> bool:
        async with self._lock:
            if snapshot.tier in self._jackpots:
                return False
            self._jackpots[snapshot.tier] = replace(snapshot)
            return True

    async def update_jackpot(self, tier: Tier, advance: JackpotAdvance) -> JackpotSnapshot | None:
        async with self._lock:
            current = self._jackpots.get(tier)
            if current is None:
                return None
            updated = advance(replace(current))
            self._jackpots[tier] = updated
            return replace(updated)
