from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from jackpot.api.routes import health as health_routes
from jackpot.main import app


async def _ok_check() -> dict[str, str]:
    return {"status": "ok"}


def _settings(tick_mode: str) -> SimpleNamespace:
    return SimpleNamespace(tick_mode=tick_mode)


def test_live_ok() -> None:
    client = TestClient(app)
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "live"}


def test_health_ok_in_process(monkeypatch) -> None:
    monkeypatch.setattr(health_routes, "_check_store", _ok_check)
    monkeypatch.setattr(health_routes, "get_settings", lambda: _settings("in_process"))

    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"store": {"status": "ok"}}}


def test_health_includes_celery_check_in_celery_mode(monkeypatch) -> None:
    monkeypatch.setattr(health_routes, "_check_store", _ok_check)
    monkeypatch.setattr(health_routes, "get_settings", lambda: _settings("celery"))
    monkeypatch.setattr(
        health_routes,
        "_check_celery_worker_sync",
        lambda: {"status": "failed", "error": "no_workers"},
    )

    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 503
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["checks"]["store"] == {"status": "ok"}
    assert payload["checks"]["celery"] == {"status": "failed", "error": "no_workers"}


@pytest.mark.asyncio
async def test_store_check_sanitizes_exception(monkeypatch) -> None:
    class _BrokenStore:
        async def ping(self) -> None:
            raise RuntimeError("password=secret")

    monkeypatch.setattr(health_routes, "get_store", lambda: _BrokenStore())

    result = await health_routes._check_store()
    assert result == {"status": "failed", "error": "store_unavailable"}


@pytest.mark.asyncio
async def test_store_check_ok_for_memory_store(memory_store, monkeypatch) -> None:
    monkeypatch.setattr(health_routes, "get_store", lambda: memory_store)

    assert await health_routes._check_store() == {"status": "ok"}
