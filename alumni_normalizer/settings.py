"""Service settings, read from ``ALUMNI_*`` environment variables or ``.env``."""

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import DEFAULT_CAMPUS_ALIASES, MIN_BATCH_YEAR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ALUMNI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Loguru level for the stderr sink")
    min_batch_year: int = Field(default=MIN_BATCH_YEAR, description="Earliest accepted batch year")
    apply_campus_aliases: bool = Field(
        default=False,
        description="Remap campus names through campus_aliases on /transform",
    )
    campus_aliases: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CAMPUS_ALIASES),
        description="Exact-match campus name remap table (JSON object)",
    )
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)


@lru_cache
def get_settings() -> Settings:
    return Settings()
