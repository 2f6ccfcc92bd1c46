from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from jackpot.api.routes.codes import router as codes_router
from jackpot.api.routes.health import router as health_router
from jackpot.api.routes.jackpots import router as jackpots_router
from jackpot.core.clock import utc_now
from jackpot.core.config import get_settings
from jackpot.core.logging import configure_logging
from jackpot.economy.codes.service import CodeRegistryService
from jackpot.economy.progression.service import JackpotService
from jackpot.store.factory import get_store
from jackpot.workers.ticker import build_tick_scheduler

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    store = get_store()
    now_utc = utc_now()

    await JackpotService.initialize_defaults(
        store,
        ranges=settings.jackpot_ranges(),
        now_utc=now_utc,
    )
    if settings.seed_default_codes:
        await CodeRegistryService.seed_default_codes(store, now_utc=now_utc)

    scheduler = None
    if settings.tick_mode == "in_process":
        scheduler = build_tick_scheduler(store, interval_seconds=settings.tick_interval_seconds)
        scheduler.start()
    logger.info("app_started", tick_mode=settings.tick_mode, store=type(store).__name__)
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Jackpot Codes API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.include_router(health_router)
    app.include_router(codes_router)
    app.include_router(jackpots_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "jackpot.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
