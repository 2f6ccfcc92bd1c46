from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jackpot.economy.tiers import Tier


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str | None = Field(default=None, alias="DATABASE_URL")

    admin_api_token: str = Field(default="dev_admin_token_change_me", alias="ADMIN_API_TOKEN")
    admin_api_allowlist: str = Field(
        default="127.0.0.1/32,::1/128",
        alias="ADMIN_API_ALLOWLIST",
    )
    admin_api_trusted_proxies: str = Field(default="", alias="ADMIN_API_TRUSTED_PROXIES")

    tick_mode: Literal["in_process", "celery"] = Field(default="in_process", alias="TICK_MODE")
    tick_interval_seconds: float = Field(default=1.0, gt=0, alias="TICK_INTERVAL_SECONDS")
    seed_default_codes: bool = Field(default=False, alias="SEED_DEFAULT_CODES")

    celery_broker_url: str = Field(default="redis://localhost:6379/0", alias="CELERY_BROKER_URL")
    celery_result_backend: str = Field(
        default="redis://localhost:6379/1",
        alias="CELERY_RESULT_BACKEND",
    )

    jackpot_mini_min: Decimal = Field(default=Decimal("1.00"), alias="JACKPOT_MINI_MIN")
    jackpot_mini_max: Decimal = Field(default=Decimal("8.00"), alias="JACKPOT_MINI_MAX")
    jackpot_minor_min: Decimal = Field(default=Decimal("10.00"), alias="JACKPOT_MINOR_MIN")
    jackpot_minor_max: Decimal = Field(default=Decimal("50.00"), alias="JACKPOT_MINOR_MAX")
    jackpot_mega_min: Decimal = Field(default=Decimal("100.00"), alias="JACKPOT_MEGA_MIN")
    jackpot_mega_max: Decimal = Field(default=Decimal("500.00"), alias="JACKPOT_MEGA_MAX")
    jackpot_grand_min: Decimal = Field(default=Decimal("1000.00"), alias="JACKPOT_GRAND_MIN")
    jackpot_grand_max: Decimal = Field(default=Decimal("5000.00"), alias="JACKPOT_GRAND_MAX")

    @model_validator(mode="after")
    def _celery_requires_database(self) -> "Settings":
        if self.tick_mode == "celery" and not self.database_url:
            raise ValueError("TICK_MODE=celery requires DATABASE_URL")
        return self

    def jackpot_ranges(self) -> dict[Tier, tuple[Decimal, Decimal]]:
        return {
            Tier.MINI: (self.jackpot_mini_min, self.jackpot_mini_max),
            Tier.MINOR: (self.jackpot_minor_min, self.jackpot_minor_max),
            Tier.MEGA: (self.jackpot_mega_min, self.jackpot_mega_max),
            Tier.GRAND: (self.jackpot_grand_min, self.jackpot_grand_max),
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
