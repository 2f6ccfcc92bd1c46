from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from jackpot.core.clock import utc_now
from jackpot.core.config import get_settings
from jackpot.core.logging import configure_logging
from jackpot.economy.codes.batch import find_batch_duplicates, generate_raw_codes, load_codes_file
from jackpot.economy.codes.service import CodeRegistryService
from jackpot.economy.tiers import TIER_VALUES, Tier
from jackpot.store.factory import get_store


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Jackpot code import/generation tool")
    parser.add_argument("--tier", choices=TIER_VALUES, required=True)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--import-file", type=Path, help="CSV with a 'code' column or one code per line")
    source.add_argument("--count", type=int, help="number of random codes to generate")
    parser.add_argument("--prefix", default="")
    parser.add_argument("--token-length", type=int, default=8)
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args(argv)


def _build_batch(args: argparse.Namespace) -> list[str]:
    if args.import_file is not None:
        raw_codes = load_codes_file(args.import_file)
    else:
        prefix = args.prefix.strip()
        if prefix and not prefix.endswith("-"):
            prefix = f"{prefix}-"
        raw_codes = generate_raw_codes(
            count=args.count,
            token_length=args.token_length,
            prefix=prefix,
        )

    if not raw_codes:
        raise ValueError("no jackpot codes to process")
    duplicates = find_batch_duplicates(raw_codes)
    if duplicates:
        raise ValueError(f"duplicate codes in batch: {', '.join(duplicates)}")
    return raw_codes


async def _run(args: argparse.Namespace) -> int:
    raw_codes = _build_batch(args)
    if args.dry_run:
        for raw_code in raw_codes:
            print(raw_code)
        return 0

    results = await CodeRegistryService.add_codes(
        get_store(),
        codes_by_tier={Tier(args.tier): raw_codes},
        now_utc=utc_now(),
    )
    failed = 0
    for raw_code, result in results.items():
        status = "OK" if result.success else result.error.value
        failed += 0 if result.success else 1
        print(f"{raw_code}\t{status}")
    print(f"added={len(results) - failed} failed={failed}", file=sys.stderr)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    configure_logging(get_settings().log_level)
    args = _parse_args(argv)
    if not get_settings().database_url and not args.dry_run:
        print("DATABASE_URL is required to import codes", file=sys.stderr)
        return 2
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
