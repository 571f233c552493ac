# ============================================================================
# src/medication_scan/utils/__init__.py
# ============================================================================
"""
Utility modules for the medication label scanner.
"""

from .exceptions import (
    MedicationScanError,
    ConfigurationError,
    OcrError,
    EngineSubmitError,
    OcrTimeoutError,
    OcrFailedError,
    VocabularyLookupError,
)

from .logging import (
    setup_logging,
    ContextFormatter,
    JsonFormatter,
    log_performance,
)

__all__ = [
    # Exceptions
    'MedicationScanError',
    'ConfigurationError',
    'OcrError',
    'EngineSubmitError',
    'OcrTimeoutError',
    'OcrFailedError',
    'VocabularyLookupError',
    # Logging
    'setup_logging',
    'ContextFormatter',
    'JsonFormatter',
    'log_performance',
]
