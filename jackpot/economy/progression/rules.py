from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from jackpot.economy.progression.constants import CYCLE_PERIOD, MONEY_QUANT, PROGRESS_EXPONENT
from jackpot.economy.progression.types import JackpotSnapshot

_ONE_MICROSECOND = timedelta(microseconds=1)


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def cycle_progress(
    cycle_start: datetime,
    now_utc: datetime,
    cycle_period: timedelta = CYCLE_PERIOD,
) -> Decimal:
    """Fraction of the cycle elapsed, clamped to [0, 1].

    Computed on whole microseconds so the result does not depend on float rounding.
    """
    elapsed = now_utc - cycle_start
    if elapsed <= timedelta(0):
        return Decimal(0)
    if elapsed >= cycle_period:
        return Decimal(1)
    return Decimal(elapsed // _ONE_MICROSECOND) / Decimal(cycle_period // _ONE_MICROSECOND)


def jackpot_value(*, min_value: Decimal, max_value: Decimal, progress: Decimal) -> Decimal:
    if progress <= 0:
        return to_money(min_value)
    eased = progress**PROGRESS_EXPONENT
    return to_money(min_value + (max_value - min_value) * eased)


def is_cycle_elapsed(
    snapshot: JackpotSnapshot,
    *,
    now_utc: datetime,
    cycle_period: timedelta = CYCLE_PERIOD,
) -> bool:
    return now_utc - snapshot.cycle_start >= cycle_period


def advance_jackpot(
    snapshot: JackpotSnapshot,
    *,
    now_utc: datetime,
    cycle_period: timedelta = CYCLE_PERIOD,
) -> tuple[JackpotSnapshot, bool]:
    """Recomputes the jackpot from its stored bounds and cycle start.

    The previous ``current`` value is never read, so repeated ticks with the
    same ``now_utc`` produce the same snapshot.
    """
    if is_cycle_elapsed(snapshot, now_utc=now_utc, cycle_period=cycle_period):
        return (
            replace(
                snapshot,
                current=to_money(snapshot.min_value),
                cycle_start=now_utc,
                last_updated=now_utc,
            ),
            True,
        )

    progress = cycle_progress(snapshot.cycle_start, now_utc, cycle_period)
    return (
        replace(
            snapshot,
            current=jackpot_value(
                min_value=snapshot.min_value,
                max_value=snapshot.max_value,
                progress=progress,
            ),
            last_updated=now_utc,
        ),
        False,
    )
