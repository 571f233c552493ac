# ============================================================================
# src/medication_scan/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .ocr_config import OcrSettings, ocr_settings
from .vocabulary_config import VocabularySettings, vocabulary_settings
from .logging_config import LoggingSettings, logging_settings

__all__ = [
    "OcrSettings",
    "ocr_settings",
    "VocabularySettings",
    "vocabulary_settings",
    "LoggingSettings",
    "logging_settings",
]
