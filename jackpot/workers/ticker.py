from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from jackpot.core.clock import Clock, utc_now
from jackpot.store.ports import JackpotStateStore
from jackpot.workers.jackpot_tick_job import run_jackpot_tick_async

JACKPOT_TICK_JOB_ID = "jackpot-tick"


def build_tick_scheduler(
    store: JackpotStateStore,
    *,
    interval_seconds: float,
    clock: Clock = utc_now,
) -> AsyncIOScheduler:
    """In-process trigger; required when the store lives in this process."""

    async def _tick() -> None:
        await run_jackpot_tick_async(store, now_utc=clock())

    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        _tick,
        "interval",
        seconds=interval_seconds,
        id=JACKPOT_TICK_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler
