from jackpot.workers.tasks.jackpot_tick import run_jackpot_tick

__all__ = [
    "run_jackpot_tick",
]
