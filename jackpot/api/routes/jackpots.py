from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from jackpot.economy.progression.service import JackpotService
from jackpot.store.errors import StoreUnavailableError
from jackpot.store.factory import get_store

router = APIRouter(prefix="/api/jackpots", tags=["jackpots"])


class JackpotStateResponse(BaseModel):
    current: Decimal
    min: Decimal
    max: Decimal
    last_updated: datetime
    cycle_start: datetime


@router.get("", response_model=dict[str, JackpotStateResponse])
async def get_jackpots() -> dict[str, JackpotStateResponse]:
    try:
        snapshots = await JackpotService.snapshot(get_store())
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail={"code": "E_STORE_UNAVAILABLE"}) from exc

    return {
        tier.value: JackpotStateResponse(
            current=snapshot.current,
            min=snapshot.min_value,
            max=snapshot.max_value,
            last_updated=snapshot.last_updated,
            cycle_start=snapshot.cycle_start,
        )
        for tier, snapshot in snapshots.items()
    }
