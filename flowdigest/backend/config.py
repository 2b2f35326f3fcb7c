"""
backend/config.py

Application configuration via Pydantic Settings.
All values can be overridden with environment variables or a .env file.

Quick start — create a .env file in your project root:
    INPUT_DIR=/var/log/firewall
    OUTPUT_DIR=/srv/flowdigest/output
    LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Input
    INPUT_DIR: str = "./syslog"

    # Output
    OUTPUT_DIR: str = "./output"
    OUTPUT_PREFIX: str = "FDB_DP_v11"
    JSON_INDENT: int = 2

    # Diagnostics: log every rejected line at DEBUG
    LOG_REJECTED_LINES: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalise_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in LOG_LEVELS:
                raise ValueError(f"unknown log level: {v!r}")
        return v

    @field_validator("JSON_INDENT")
    @classmethod
    def non_negative_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("JSON_INDENT must be >= 0")
        return v


settings = Settings()
