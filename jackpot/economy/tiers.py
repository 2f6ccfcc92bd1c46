from __future__ import annotations

from enum import Enum


class Tier(str, Enum):
    """Jackpot tiers in lookup order."""

    MINI = "mini"
    MINOR = "minor"
    MEGA = "mega"
    GRAND = "grand"

    @classmethod
    def parse(cls, raw_tier: str | None) -> Tier | None:
        if raw_tier is None:
            return None
        try:
            return cls(raw_tier.strip().lower())
        except ValueError:
            return None


TIER_VALUES: tuple[str, ...] = tuple(tier.value for tier in Tier)
