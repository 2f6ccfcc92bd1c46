from __future__ import annotations

import csv
import secrets
from pathlib import Path

from jackpot.economy.codes.normalization import normalize_code

# No 0/O or 1/I/L so codes survive being read aloud or copied by hand.
CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"


def generate_raw_codes(
    *,
    count: int,
    token_length: int = 8,
    prefix: str = "",
    existing_codes: set[str] | None = None,
) -> list[str]:
    if count <= 0:
        raise ValueError("count must be positive")
    if token_length <= 0:
        raise ValueError("token_length must be positive")

    taken = {normalize_code(code) for code in existing_codes or ()}
    prefix = normalize_code(prefix)
    generated: list[str] = []
    max_attempts = max(100, count * 50)

    for _ in range(max_attempts):
        if len(generated) == count:
            return generated
        token = "".join(secrets.choice(CODE_ALPHABET) for _ in range(token_length))
        code = f"{prefix}{token}"
        if code in taken:
            continue
        taken.add(code)
        generated.append(code)

    if len(generated) == count:
        return generated
    raise RuntimeError("unable to generate unique jackpot codes")


def load_codes_file(path: Path) -> list[str]:
    """Reads codes from a CSV with a ``code`` column, or one code per line."""
    with path.open("r", encoding="utf-8", newline="") as file:
        reader = csv.DictReader(file)
        if "code" in (reader.fieldnames or []):
            return [row["code"].strip() for row in reader if (row.get("code") or "").strip()]

    with path.open("r", encoding="utf-8") as file:
        return [line.strip() for line in file if line.strip()]


def find_batch_duplicates(raw_codes: list[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for raw_code in raw_codes:
        code = normalize_code(raw_code)
        if code in seen:
            duplicates.append(raw_code)
        seen.add(code)
    return duplicates
