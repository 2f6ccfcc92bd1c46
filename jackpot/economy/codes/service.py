from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

import structlog

from jackpot.economy.codes.constants import DEFAULT_SEED_CODES
from jackpot.economy.codes.errors import CodeError
from jackpot.economy.codes.normalization import is_storable_code, normalize_code
from jackpot.economy.codes.types import CodeOperationResult, CodeValidation
from jackpot.economy.tiers import Tier
from jackpot.store.errors import CodeConflictError, StoreUnavailableError
from jackpot.store.ports import CodeRegistryStore

logger = structlog.get_logger(__name__)

_PERSISTENCE_FAILURE = CodeOperationResult(error=CodeError.PERSISTENCE_FAILURE)


class CodeRegistryService:
    """Code lifecycle: Unregistered -> Registered -> Redeemed.

    A code may be redeemed without ever being registered. Only ``clear_all``
    returns codes to Unregistered.
    """

    @staticmethod
    async def list_codes(store: CodeRegistryStore) -> dict[Tier, list[str]] | None:
        try:
            codes = await store.list_codes()
        except StoreUnavailableError:
            logger.exception("jackpot_codes_list_failed")
            return None
        return {tier: list(codes.get(tier, [])) for tier in Tier}

    @staticmethod
    async def add_code(
        store: CodeRegistryStore,
        *,
        tier: str | Tier,
        raw_code: str,
        now_utc: datetime,
    ) -> CodeOperationResult:
        resolved_tier = tier if isinstance(tier, Tier) else Tier.parse(tier)
        if resolved_tier is None:
            return CodeOperationResult(error=CodeError.INVALID_TIER)

        code = normalize_code(raw_code)
        if not is_storable_code(code):
            return CodeOperationResult(error=CodeError.INVALID_CODE)

        try:
            if await store.find_tier(code) is not None:
                return CodeOperationResult(error=CodeError.ALREADY_EXISTS)
            await store.insert_code(tier=resolved_tier, code=code, now_utc=now_utc)
        except CodeConflictError:
            return CodeOperationResult(error=CodeError.ALREADY_EXISTS)
        except StoreUnavailableError:
            logger.exception("jackpot_code_add_failed", tier=resolved_tier.value)
            return _PERSISTENCE_FAILURE

        logger.info("jackpot_code_added", tier=resolved_tier.value, code_length=len(code))
        return CodeOperationResult()

    @staticmethod
    async def clear_all(store: CodeRegistryStore) -> CodeOperationResult:
        try:
            await store.clear_codes()
        except StoreUnavailableError:
            logger.exception("jackpot_codes_clear_failed")
            return _PERSISTENCE_FAILURE

        logger.warning("jackpot_codes_cleared")
        return CodeOperationResult()

    @staticmethod
    async def mark_used(
        store: CodeRegistryStore,
        *,
        raw_code: str,
        now_utc: datetime,
    ) -> CodeOperationResult:
        code = normalize_code(raw_code)
        if not is_storable_code(code):
            return CodeOperationResult(error=CodeError.INVALID_CODE)

        # No registration check: unknown codes can be burned too.
        try:
            if await store.is_used(code):
                return CodeOperationResult(error=CodeError.ALREADY_USED)
            await store.insert_used(code=code, now_utc=now_utc)
        except CodeConflictError:
            return CodeOperationResult(error=CodeError.ALREADY_USED)
        except StoreUnavailableError:
            logger.exception("jackpot_code_mark_used_failed")
            return _PERSISTENCE_FAILURE

        logger.info("jackpot_code_used", code_length=len(code))
        return CodeOperationResult()

    @staticmethod
    async def validate(store: CodeRegistryStore, *, raw_code: str) -> CodeValidation:
        code = normalize_code(raw_code)
        if not code:
            return CodeValidation(valid=False, reason=CodeError.NOT_FOUND)

        try:
            if await store.is_used(code):
                return CodeValidation(valid=False, reason=CodeError.ALREADY_USED)
            tier = await store.find_tier(code)
        except StoreUnavailableError:
            logger.exception("jackpot_code_validate_failed")
            return CodeValidation(valid=False, reason=CodeError.PERSISTENCE_FAILURE)

        if tier is None:
            return CodeValidation(valid=False, reason=CodeError.NOT_FOUND)
        return CodeValidation(valid=True, tier=tier)

    @staticmethod
    async def add_codes(
        store: CodeRegistryStore,
        *,
        codes_by_tier: Mapping[Tier, Sequence[str]],
        now_utc: datetime,
    ) -> dict[str, CodeOperationResult]:
        results: dict[str, CodeOperationResult] = {}
        for tier, raw_codes in codes_by_tier.items():
            for raw_code in raw_codes:
                results[raw_code] = await CodeRegistryService.add_code(
                    store,
                    tier=tier,
                    raw_code=raw_code,
                    now_utc=now_utc,
                )
        return results

    @staticmethod
    async def seed_default_codes(store: CodeRegistryStore, *, now_utc: datetime) -> int:
        results = await CodeRegistryService.add_codes(
            store,
            codes_by_tier=DEFAULT_SEED_CODES,
            now_utc=now_utc,
        )
        seeded = sum(1 for result in results.values() if result.success)
        logger.info("jackpot_codes_seeded", seeded=seeded, total=len(results))
        return seeded
