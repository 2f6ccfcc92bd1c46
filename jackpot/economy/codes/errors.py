from __future__ import annotations

from enum import Enum


class CodeError(str, Enum):
    INVALID_TIER = "INVALID_TIER"
    INVALID_CODE = "INVALID_CODE"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    ALREADY_USED = "ALREADY_USED"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
