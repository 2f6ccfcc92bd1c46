from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from jackpot.economy.progression.types import JackpotSnapshot
from jackpot.economy.tiers import Tier

JackpotAdvance = Callable[[JackpotSnapshot], JackpotSnapshot]


class CodeRegistryStore(Protocol):
    """Durable code tables.

    Inserts must be rejected with ``CodeConflictError`` by the store itself when
    the code value already exists; any other failure surfaces as
    ``StoreUnavailableError``.
    """

    async def list_codes(self) -> dict[Tier, list[str]]: ...

    async def find_tier(self, code: str) -> Tier | None: ...

    async def insert_code(self, *, tier: Tier, code: str, now_utc: datetime) -> None: ...

    async def is_used(self, code: str) -> bool: ...

    async def insert_used(self, *, code: str, now_utc: datetime) -> None: ...

    async def clear_codes(self) -> None: ...


class JackpotStateStore(Protocol):
    async def list_jackpots(self) -> dict[Tier, JackpotSnapshot]: ...

    async def create_jackpot_if_missing(self, snapshot: JackpotSnapshot) -> bool: ...

    async def update_jackpot(self, tier: Tier, advance: JackpotAdvance) -> JackpotSnapshot | None:
        """Reads, advances and writes one tier's row as a single atomic unit.

        Returns ``None`` when the tier has no stored state.
        """
        ...


class JackpotStore(CodeRegistryStore, JackpotStateStore, Protocol):
    async def ping(self) -> None: ...
