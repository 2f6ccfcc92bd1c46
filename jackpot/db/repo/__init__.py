from jackpot.db.repo.codes_repo import CodesRepo
from jackpot.db.repo.jackpot_state_repo import JackpotStateRepo
from jackpot.db.repo.used_codes_repo import UsedCodesRepo

__all__ = [
    "CodesRepo",
    "JackpotStateRepo",
    "UsedCodesRepo",
]
