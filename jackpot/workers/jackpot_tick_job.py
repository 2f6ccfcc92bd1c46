from __future__ import annotations

from collections import Counter
from datetime import datetime

import structlog

from jackpot.core.clock import utc_now
from jackpot.core.config import get_settings
from jackpot.economy.progression.service import JackpotService
from jackpot.economy.progression.types import TickOutcome
from jackpot.store.errors import StoreUnavailableError
from jackpot.store.factory import get_store
from jackpot.store.ports import JackpotStateStore

logger = structlog.get_logger(__name__)


async def run_jackpot_tick_async(
    store: JackpotStateStore | None = None,
    *,
    now_utc: datetime | None = None,
) -> dict[str, int]:
    store = store if store is not None else get_store()
    now_utc = now_utc if now_utc is not None else utc_now()

    try:
        await JackpotService.initialize_defaults(
            store,
            ranges=get_settings().jackpot_ranges(),
            now_utc=now_utc,
        )
    except StoreUnavailableError:
        logger.exception("jackpot_tick_initialize_failed")

    outcomes = await JackpotService.tick(store, now_utc=now_utc)
    counts = Counter(outcome.value for outcome in outcomes.values())
    result = {outcome.value.lower(): counts.get(outcome.value, 0) for outcome in TickOutcome}

    if result["failed"] or result["reset"]:
        logger.info("jackpot_tick_finished", **result)
    else:
        logger.debug("jackpot_tick_finished", **result)
    return result
