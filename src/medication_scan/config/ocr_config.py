# ============================================================================
# src/medication_scan/config/ocr_config.py
# ============================================================================
"""
OCR Engine Settings
- Azure Computer Vision Read credentials
- Polling budget
- Whole-sequence retries
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OcrSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    AZURE_OCR_KEY: str = Field(
        default="",
        description="Subscription key for the Azure Computer Vision resource"
    )
    AZURE_OCR_ENDPOINT: str = Field(
        default="",
        description="Azure Computer Vision endpoint, e.g. https://<name>.cognitiveservices.azure.com"
    )
    OCR_LANGUAGE: Optional[str] = Field(
        default="en",
        description="Language hint passed to the Read API (None lets the engine detect it)"
    )
    OCR_MAX_POLLING_SECONDS: float = Field(
        default=60.0,
        gt=0,
        description="Wall-clock budget per file, measured from submission"
    )
    OCR_MAX_RETRIES: int = Field(
        default=3,
        ge=0,
        description="Retries of the whole submit+poll sequence on transient errors"
    )
    OCR_REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single HTTP request to the engine (seconds)"
    )
    OCR_READ_API_VERSION: str = Field(
        default="v3.2",
        description="Read API version segment of the analyze URL"
    )


ocr_settings = OcrSettings()
