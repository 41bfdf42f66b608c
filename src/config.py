from __future__ import annotations

from functools import cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    log_level: str = "WARNING"
    money_places: int = 2
    balances_csv: Path = Path("data/balances.csv")
    rates_csv: Path = Path("data/rates.csv")

    model_config = SettingsConfigDict(
        env_prefix="EXCHANGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@cache
def config() -> AppSettings:
    return AppSettings()
