from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from jackpot.economy.tiers import Tier


class TickOutcome(str, Enum):
    ADVANCED = "ADVANCED"
    RESET = "RESET"
    MISSING = "MISSING"
    FAILED = "FAILED"


@dataclass(slots=True)
class JackpotSnapshot:
    tier: Tier
    current: Decimal
    min_value: Decimal
    max_value: Decimal
    cycle_start: datetime
    last_updated: datetime
