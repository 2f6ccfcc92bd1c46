from __future__ import annotations

from functools import lru_cache

from jackpot.core.config import get_settings
from jackpot.store.memory_store import MemoryStore
from jackpot.store.ports import JackpotStore


@lru_cache(maxsize=1)
def get_store() -> JackpotStore:
    if not get_settings().database_url:
        return MemoryStore()

    from jackpot.db.session import SessionLocal
    from jackpot.store.sql_store import SqlStore

    return SqlStore(SessionLocal)
