# ============================================================================
# src/medication_scan/config/logging_config.py
# ============================================================================
"""
Logging Settings
- Log level
- JSON output
- Log file
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT_JSON: bool = Field(
        default=False,
        description="Emit log records as JSON lines"
    )
    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Optional log file in addition to stdout"
    )


logging_settings = LoggingSettings()
