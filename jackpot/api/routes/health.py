from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from jackpot.core.config import get_settings
from jackpot.store.factory import get_store

router = APIRouter(tags=["health"])


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str) -> dict[str, str]:
    return {"status": "failed", "error": error}


async def _check_store() -> dict[str, Any]:
    try:
        await get_store().ping()
        return _ok_check()
    except Exception:
        return _failed_check("store_unavailable")


def _check_celery_worker_sync() -> dict[str, Any]:
    try:
        from jackpot.workers.celery_app import celery_app

        inspector = celery_app.control.inspect(timeout=1.0)
        replies = inspector.ping() or {}
        if not replies:
            return _failed_check("no_workers")
        return _ok_check({"workers": len(replies)})
    except Exception:
        return _failed_check("celery_unavailable")


async def _collect_checks() -> dict[str, dict[str, Any]]:
    checks = {"store": await _check_store()}
    if get_settings().tick_mode == "celery":
        checks["celery"] = await asyncio.to_thread(_check_celery_worker_sync)
    return checks


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}


@router.get("/health")
async def health() -> JSONResponse:
    checks = await _collect_checks()
    is_healthy = all(check.get("status") == "ok" for check in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if is_healthy else "degraded",
            "checks": checks,
        },
    )
