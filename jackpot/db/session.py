from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from jackpot.core.config import get_settings


def build_engine(database_url: str) -> AsyncEngine:
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url)
    return create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


_database_url = get_settings().database_url
if not _database_url:
    raise RuntimeError("DATABASE_URL is not configured; the SQL store is unavailable")

engine = build_engine(_database_url)
SessionLocal = build_session_factory(engine)


async def dispose_engine() -> None:
    await engine.dispose()
