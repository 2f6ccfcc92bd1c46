from jackpot.economy.tiers import Tier

DEFAULT_SEED_CODES: dict[Tier, tuple[str, ...]] = {
    Tier.MINI: ("MINI-2024-001",),
    Tier.MINOR: ("MINOR-2024-001",),
    Tier.MEGA: ("MEGA-2024-001",),
    Tier.GRAND: ("GRAND-2024-001",),
}
