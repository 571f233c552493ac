# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

from typing import Optional

import pytest

from medication_scan.config import OcrSettings
from medication_scan.extractors.base import BaseOcrEngine
from medication_scan.extractors.ocr_client import OcrJobClient
from tests.fakes import FakeTimer, make_page


@pytest.fixture
def ocr_config():
    """OCR settings independent of the environment"""
    return OcrSettings(
        _env_file=None,
        AZURE_OCR_KEY="test-key",
        AZURE_OCR_ENDPOINT="https://ocr.test",
        OCR_MAX_POLLING_SECONDS=5.0,
        OCR_MAX_RETRIES=2,
    )


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def make_client(ocr_config, timer):
    """Factory for an OcrJobClient on a scripted engine with fake time"""
    def _make(engine: BaseOcrEngine, config: Optional[OcrSettings] = None) -> OcrJobClient:
        return OcrJobClient(engine, settings=config or ocr_config, sleep=timer.sleep, clock=timer.clock)
    return _make


@pytest.fixture
def tylenol_label_pages():
    """Single-line label photo"""
    return [make_page(1, "Tylenol Extra Strength 500 mg tablet")]


@pytest.fixture
def aspirin_label_pages():
    """Label where the name and the strength are on separate lines"""
    return [make_page(1, "Aspirin", "81 mg chewable")]
