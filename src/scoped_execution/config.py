"""Environment-driven settings.

Settings are loaded from environment variables and a local `.env` file (if
present). Tests can override the env file via `WaitLockOptions(_env_file=path)`.
"""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scoped_execution.logging import configure_logging


class WaitLockOptions(BaseSettings):
    """Options for the wait-then-release lock preset.

    Environment variables:
    - SCOPED_EXECUTION_WAIT_LOCK_TIMEOUT_MS
    """

    timeout_ms: int = Field(
        default=500,
        ge=0,
        description="Milliseconds to wait for the lock before the pre-step fails",
    )

    model_config = SettingsConfigDict(
        env_prefix="SCOPED_EXECUTION_WAIT_LOCK_",
        env_file=".env",
        extra="ignore",
    )


class ScopedExecutionSettings(BaseSettings):
    """Top-level settings for applications embedding scoped_execution."""

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    debug: bool = Field(
        default=False,
        description="Log every context run at DEBUG level",
    )

    wait_lock: WaitLockOptions = Field(
        default_factory=WaitLockOptions,
        description="Lock preset options",
    )

    model_config = SettingsConfigDict(
        env_prefix="SCOPED_EXECUTION_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(self.log_level)

        if self.debug:
            logging.getLogger("scoped_execution").setLevel(logging.DEBUG)
