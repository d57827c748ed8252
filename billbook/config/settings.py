"""
Configuration Management for Bill Book

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
There are no external services, so this is only the handful of knobs
that change how the ledger is persisted and displayed.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Ledger settings.

    Loads configuration from BILLBOOK_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Persistence
    storage_key: str = Field(
        default="billRecords",
        min_length=1,
        description="Key under which the serialized bill array is stored",
    )
    storage_path: Path = Field(
        default=Path("billbook.json"),
        description="File backing the key-value store",
    )
    strict_load: bool = Field(
        default=False,
        description="Raise on malformed persisted data instead of starting empty",
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        max_length=5,
        description="Symbol prefixed to formatted amounts",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Keys are used verbatim, surrounding whitespace is almost always a typo."""
        if v != v.strip():
            raise ValueError("storage_key must not have leading or trailing whitespace")
        return v


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
