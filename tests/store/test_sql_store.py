from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from jackpot.economy.progression.types import JackpotSnapshot
from jackpot.economy.tiers import Tier
from jackpot.store.errors import CodeConflictError, StoreUnavailableError
from jackpot.store.sql_store import SqlStore

UTC = timezone.utc
NOW_UTC = datetime(2026, 2, 17, 12, 0, tzinfo=UTC)


def _initial(tier: Tier = Tier.MINI) -> JackpotSnapshot:
    return JackpotSnapshot(
        tier=tier,
        current=Decimal("1.00"),
        min_value=Decimal("1.00"),
        max_value=Decimal("8.00"),
        cycle_start=NOW_UTC,
        last_updated=NOW_UTC,
    )


@pytest.mark.asyncio
async def test_insert_code_relies_on_unique_constraint(sql_store: SqlStore) -> None:
    await sql_store.insert_code(tier=Tier.MINI, code="DUP", now_utc=NOW_UTC)

    with pytest.raises(CodeConflictError):
        await sql_store.insert_code(tier=Tier.GRAND, code="DUP", now_utc=NOW_UTC)

    codes = await sql_store.list_codes()
    assert codes[Tier.MINI] == ["DUP"]
    assert codes[Tier.GRAND] == []


@pytest.mark.asyncio
async def test_insert_used_relies_on_primary_key(sql_store: SqlStore) -> None:
    await sql_store.insert_used(code="USED", now_utc=NOW_UTC)

    with pytest.raises(CodeConflictError):
        await sql_store.insert_used(code="USED", now_utc=NOW_UTC)
    assert await sql_store.is_used("USED") is True


@pytest.mark.asyncio
async def test_clear_codes_empties_both_tables(sql_store: SqlStore) -> None:
    await sql_store.insert_code(tier=Tier.MEGA, code="M1", now_utc=NOW_UTC)
    await sql_store.insert_used(code="M1", now_utc=NOW_UTC)

    await sql_store.clear_codes()

    assert await sql_store.find_tier("M1") is None
    assert await sql_store.is_used("M1") is False


@pytest.mark.asyncio
async def test_create_jackpot_if_missing_does_not_overwrite(sql_store: SqlStore) -> None:
    assert await sql_store.create_jackpot_if_missing(_initial()) is True

    later = replace(_initial(), cycle_start=NOW_UTC + timedelta(hours=1), max_value=Decimal("99.00"))
    assert await sql_store.create_jackpot_if_missing(later) is False

    stored = (await sql_store.list_jackpots())[Tier.MINI]
    assert stored.max_value == Decimal("8.00")
    assert stored.cycle_start == NOW_UTC


@pytest.mark.asyncio
async def test_update_jackpot_round_trips_decimal_and_utc(sql_store: SqlStore) -> None:
    await sql_store.create_jackpot_if_missing(_initial())
    later = NOW_UTC + timedelta(minutes=30)

    updated = await sql_store.update_jackpot(
        Tier.MINI,
        lambda snapshot: replace(snapshot, current=Decimal("2.25"), last_updated=later),
    )

    stored = (await sql_store.list_jackpots())[Tier.MINI]
    assert updated is not None
    assert stored.current == Decimal("2.25")
    assert stored.last_updated == later
    assert stored.cycle_start.tzinfo is not None


@pytest.mark.asyncio
async def test_update_jackpot_missing_tier_returns_none(sql_store: SqlStore) -> None:
    assert await sql_store.update_jackpot(Tier.GRAND, lambda snapshot: snapshot) is None


@pytest.mark.asyncio
async def test_update_jackpot_rolls_back_when_advance_fails(sql_store: SqlStore) -> None:
    await sql_store.create_jackpot_if_missing(_initial())

    def _explode(snapshot: JackpotSnapshot) -> JackpotSnapshot:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await sql_store.update_jackpot(Tier.MINI, _explode)

    stored = (await sql_store.list_jackpots())[Tier.MINI]
    assert stored == _initial()


@pytest.mark.asyncio
async def test_update_jackpot_rejects_value_outside_range(sql_store: SqlStore) -> None:
    await sql_store.create_jackpot_if_missing(_initial())

    with pytest.raises(StoreUnavailableError):
        await sql_store.update_jackpot(
            Tier.MINI,
            lambda snapshot: replace(snapshot, current=Decimal("9.00")),
        )

    stored = (await sql_store.list_jackpots())[Tier.MINI]
    assert stored.current == Decimal("1.00")


@pytest.mark.asyncio
async def test_list_jackpots_follows_tier_order(sql_store: SqlStore) -> None:
    for tier in (Tier.GRAND, Tier.MINI, Tier.MEGA):
        await sql_store.create_jackpot_if_missing(_initial(tier))

    assert list(await sql_store.list_jackpots()) == [Tier.MINI, Tier.MEGA, Tier.GRAND]
