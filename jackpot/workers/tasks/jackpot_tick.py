from __future__ import annotations

from jackpot.core.config import get_settings
from jackpot.workers.asyncio_runner import run_async_job
from jackpot.workers.celery_app import celery_app
from jackpot.workers.jackpot_tick_job import run_jackpot_tick_async

JACKPOT_TICK_TASK_NAME = "jackpot.workers.tasks.jackpot_tick.run_jackpot_tick"


@celery_app.task(name=JACKPOT_TICK_TASK_NAME)
def run_jackpot_tick() -> dict[str, int]:
    return run_async_job(run_jackpot_tick_async())


celery_app.conf.beat_schedule = celery_app.conf.beat_schedule or {}
celery_app.conf.beat_schedule.update(
    {
        "jackpot-tick-every-second": {
            "task": JACKPOT_TICK_TASK_NAME,
            "schedule": get_settings().tick_interval_seconds,
            "options": {"queue": "q_jackpot", "expires": 5},
        },
    }
)
