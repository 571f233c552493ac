# ============================================================================
# src/medication_scan/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the medication label scanner.
"""

from typing import Any, Optional


class MedicationScanError(Exception):
    """Base exception for all medication scan errors."""
    pass


class ConfigurationError(MedicationScanError):
    """Invalid configuration."""
    pass


class OcrError(MedicationScanError):
    """Error while running OCR on a source file."""
    pass


class EngineSubmitError(OcrError):
    """OCR engine rejected the initial analyze request."""
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class OcrTimeoutError(OcrError):
    """Polling budget exceeded before the OCR operation finished."""
    def __init__(self, message: str, operation_id: Optional[str] = None):
        super().__init__(message)
        self.operation_id = operation_id


class OcrFailedError(OcrError):
    """OCR engine reported failure, or every retry was used up."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class VocabularyLookupError(MedicationScanError):
    """Drug vocabulary service could not answer a lookup."""
    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name
