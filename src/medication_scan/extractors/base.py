# ============================================================================
# src/medication_scan/extractors/base.py
# ============================================================================
"""
Base OCR Engine Interface

An engine runs OCR asynchronously: submit() hands over the bytes and returns
an operation handle, poll() reports the state of that operation. Engines must
translate their own wire format into ReadOutcome values.
"""

from abc import ABC, abstractmethod
import logging
from typing import Optional

from ..config.ocr_config import OcrSettings
from ..core.models import ReadOutcome


class BaseOcrEngine(ABC):
    """
    Abstract base class for asynchronous OCR engines.

    All engines must implement:
    - submit(): Start an analyze operation
    - poll(): Fetch the operation's current state
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def submit(self, data: bytes, config: Optional[OcrSettings] = None) -> str:
        """
        Start OCR on an image or PDF.

        Args:
            data: Raw file bytes
            config: Per-call credentials, endpoint and language; None uses
                the engine's own settings

        Returns:
            Opaque operation handle

        Raises:
            EngineSubmitError: The engine rejected the request
        """
        pass

    @abstractmethod
    async def poll(self, handle: str, config: Optional[OcrSettings] = None) -> ReadOutcome:
        """
        Fetch the state of an operation.

        Args:
            handle: Operation handle returned by submit()
            config: Same settings that were passed to submit()

        Returns:
            ReadPending, ReadSucceeded or ReadFailed
        """
        pass

    def operation_id(self, handle: str) -> str:
        """Short identifier for logs and diagnostics."""
        return handle

    async def close(self):
        """Release network resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
