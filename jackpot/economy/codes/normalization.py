from __future__ import annotations

MAX_CODE_LENGTH = 64


def normalize_code(raw_code: str) -> str:
    return raw_code.strip().upper()


def is_storable_code(normalized_code: str) -> bool:
    return 0 < len(normalized_code) <= MAX_CODE_LENGTH
