from jackpot.db.models.jackpot_codes import JackpotCode
from jackpot.db.models.jackpot_state import JackpotState
from jackpot.db.models.used_codes import UsedCode

__all__ = [
    "JackpotCode",
    "JackpotState",
    "UsedCode",
]
