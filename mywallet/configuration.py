"""Mini README: Centralised configuration for the MyWallet backend.

Structure:
    * WalletSettings - Pydantic settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values come from ``MYWALLET_*`` environment variables or a ``.env`` file.
    The application factory accepts an explicit ``WalletSettings`` instance so
    tests can point at an in-memory database without touching the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WalletSettings(BaseSettings):
    """Runtime configuration for the wallet service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    database_url: str = Field(
        "sqlite:///mywallet.db",
        description="SQLAlchemy URL of the database holding users, sessions and entries.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        5000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    password_hash_rounds: int = Field(
        10,
        description="bcrypt cost factor applied when hashing new passwords.",
        ge=4,
        le=31,
    )
    session_ttl_minutes: Optional[int] = Field(
        None,
        description=(
            "Optional validity window for sessions. Leave unset to keep sessions"
            " alive until an explicit logout."
        ),
        ge=1,
    )
    log_level: str = Field("INFO", description="Root logging level.")

    model_config = SettingsConfigDict(
        env_prefix="MYWALLET_",
        env_file=".env",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        """Accept lower-case level names from the environment."""

        return str(value).strip().upper()


@lru_cache()
def get_settings() -> WalletSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return WalletSettings()
