from __future__ import annotations

from typing import NoReturn

import structlog
from fastapi import APIRouter, HTTPException, Request

from jackpot.api.routes.codes_models import (
    AddCodeRequest,
    CodeRequest,
    CodesResponse,
    SuccessResponse,
    ValidateCodeResponse,
)
from jackpot.core.clock import get_clock
from jackpot.core.config import get_settings
from jackpot.economy.codes.errors import CodeError
from jackpot.economy.codes.service import CodeRegistryService
from jackpot.economy.codes.types import CodeOperationResult
from jackpot.services.admin_auth import is_admin_request_allowed
from jackpot.store.factory import get_store

router = APIRouter(prefix="/api/codes", tags=["codes"])
logger = structlog.get_logger(__name__)

CODE_ERROR_RESPONSES: dict[CodeError, tuple[int, str]] = {
    CodeError.INVALID_TIER: (400, "E_TIER_INVALID"),
    CodeError.INVALID_CODE: (400, "E_CODE_INVALID"),
    CodeError.ALREADY_EXISTS: (409, "E_CODE_EXISTS"),
    CodeError.ALREADY_USED: (409, "E_CODE_ALREADY_USED"),
    CodeError.NOT_FOUND: (404, "E_CODE_NOT_FOUND"),
    CodeError.PERSISTENCE_FAILURE: (503, "E_STORE_UNAVAILABLE"),
}


def _assert_admin_access(request: Request) -> None:
    settings = get_settings()
    allowed, reason = is_admin_request_allowed(
        request,
        expected_token=settings.admin_api_token,
        allowlist=settings.admin_api_allowlist,
        trusted_proxies=settings.admin_api_trusted_proxies,
    )
    if not allowed:
        logger.warning("admin_codes_auth_failed", reason=reason, path=request.url.path)
        raise HTTPException(status_code=403, detail={"code": "E_FORBIDDEN"})


def _raise_for_error(error: CodeError) -> NoReturn:
    status_code, code = CODE_ERROR_RESPONSES[error]
    raise HTTPException(status_code=status_code, detail={"code": code})


def _as_success(result: CodeOperationResult) -> SuccessResponse:
    if result.error is not None:
        _raise_for_error(result.error)
    return SuccessResponse()


@router.get("", response_model=CodesResponse)
async def list_codes(request: Request) -> CodesResponse:
    _assert_admin_access(request)
    codes = await CodeRegistryService.list_codes(get_store())
    if codes is None:
        _raise_for_error(CodeError.PERSISTENCE_FAILURE)
    return CodesResponse(**{tier.value: tier_codes for tier, tier_codes in codes.items()})


@router.post("/add", response_model=SuccessResponse)
async def add_code(payload: AddCodeRequest, request: Request) -> SuccessResponse:
    _assert_admin_access(request)
    result = await CodeRegistryService.add_code(
        get_store(),
        tier=payload.type,
        raw_code=payload.code,
        now_utc=get_clock()(),
    )
    return _as_success(result)


@router.post("/clear", response_model=SuccessResponse)
async def clear_codes(request: Request) -> SuccessResponse:
    _assert_admin_access(request)
    result = await CodeRegistryService.clear_all(get_store())
    return _as_success(result)


@router.post("/use", response_model=SuccessResponse)
async def use_code(payload: CodeRequest) -> SuccessResponse:
    result = await CodeRegistryService.mark_used(
        get_store(),
        raw_code=payload.code,
        now_utc=get_clock()(),
    )
    return _as_success(result)


@router.post("/validate", response_model=ValidateCodeResponse)
async def validate_code(payload: CodeRequest) -> ValidateCodeResponse:
    validation = await CodeRegistryService.validate(get_store(), raw_code=payload.code)
    if validation.reason == CodeError.PERSISTENCE_FAILURE:
        _raise_for_error(CodeError.PERSISTENCE_FAILURE)
    return ValidateCodeResponse(
        valid=validation.valid,
        tier=None if validation.tier is None else validation.tier.value,
        reason=None if validation.reason is None else validation.reason.value,
    )
