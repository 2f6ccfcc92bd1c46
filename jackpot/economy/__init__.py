from jackpot.economy.codes.service import CodeRegistryService
from jackpot.economy.progression.service import JackpotService

__all__ = [
    "CodeRegistryService",
    "JackpotService",
]
