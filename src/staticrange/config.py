"""
config.py
---------
Runtime settings read from STATICRANGE_* environment variables or a .env file.
"""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXCLUDE_KEYWORDS = ["bluetooth", "virtual", "vmware", "hyper-v", "loopback"]


class AppSettings(BaseSettings):
    """Settings for the PowerShell driver, adapter filtering and logging."""

    model_config = SettingsConfigDict(
        env_prefix="STATICRANGE_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    powershell_executable: str = Field(
        default="powershell",
        min_length=1,
        description="PowerShell binary used to run NetTCPIP/DnsClient cmdlets.",
    )
    command_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout for a single PowerShell invocation (seconds).",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional file that receives a plain-text copy of the log.",
    )
    exclude_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_KEYWORDS),
        description="Adapters whose name or description contains one of these are hidden.",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @field_validator("exclude_keywords")
    @classmethod
    def _lower_keywords(cls, value: List[str]) -> List[str]:
        return [v.strip().lower() for v in value if v.strip()]
