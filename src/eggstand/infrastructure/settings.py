"""Runtime configuration, read from ``EGGSTAND_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EGGSTAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JSON store
    data_dir: Path = Path("data")

    # Reservations
    default_product: str = "Carton of eggs"
    default_max_stock: int = 100
    stock_update_attempts: int = 3

    # Daily top-up step
    replenish_amount: int = 3

    # Reporting
    eggs_per_carton: int = 12

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
