# ============================================================================
# src/medication_scan/config/vocabulary_config.py
# ============================================================================
"""
Drug Vocabulary Settings (RxNav)
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VocabularySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    RXNAV_BASE_URL: str = Field(
        default="https://rxnav.nlm.nih.gov/REST",
        description="Base URL of the NLM RxNav REST API"
    )
    RXNAV_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for one RxNav request (seconds)"
    )
    RXNAV_MAX_CONCURRENT: int = Field(
        default=8,
        ge=1,
        description="Maximum RxNav lookups in flight at once"
    )


vocabulary_settings = VocabularySettings()
