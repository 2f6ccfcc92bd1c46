from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from jackpot.db import models  # noqa: F401
from jackpot.db.models.base import Base
from jackpot.store.memory_store import MemoryStore
from jackpot.store.sql_store import SqlStore

UTC = timezone.utc
NOW_UTC = datetime(2026, 2, 17, 12, 0, tzinfo=UTC)


async def _build_sql_store(tmp_path) -> tuple[SqlStore, object]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'jackpot_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return SqlStore(async_sessionmaker(engine, expire_on_commit=False)), engine


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
async def sql_store(tmp_path) -> AsyncIterator[SqlStore]:
    store, engine = await _build_sql_store(tmp_path)
    yield store
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
async def store(request, tmp_path) -> AsyncIterator[MemoryStore | SqlStore]:
    if request.param == "memory":
        yield MemoryStore()
        return

    sql_store, engine = await _build_sql_store(tmp_path)
    yield sql_store
    await engine.dispose()
