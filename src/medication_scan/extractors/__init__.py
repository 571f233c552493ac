# src/medication_scan/extractors/__init__.py
"""
OCR Extraction Module

Provides:
- Engine interface for asynchronous OCR services
- Azure Computer Vision Read engine
- OCR job client with polling, timeout and retry
- Concurrent batch OCR with partial-failure tolerance
"""

from .base import BaseOcrEngine
from .azure_read import AzureReadEngine, parse_read_result
from .ocr_client import OcrJobClient

__all__ = [
    "BaseOcrEngine",
    "AzureReadEngine",
    "parse_read_result",
    "OcrJobClient",
]
