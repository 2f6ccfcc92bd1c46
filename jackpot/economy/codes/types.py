from __future__ import annotations

from dataclasses import dataclass

from jackpot.economy.codes.errors import CodeError
from jackpot.economy.tiers import Tier


@dataclass(frozen=True, slots=True)
class CodeOperationResult:
    error: CodeError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class CodeValidation:
    valid: bool
    tier: Tier | None = None
    reason: CodeError | None = None
