# ============================================================================
# src/medication_scan/extractors/azure_read.py
# ============================================================================
"""
Azure Computer Vision Read Engine

Read is asynchronous on Azure's side:
1. POST the image to /vision/{version}/read/analyze -> 202 + Operation-Location
2. GET the Operation-Location URL until status is succeeded or failed

Response body of step 2:
    {
      "status": "notStarted" | "running" | "succeeded" | "failed",
      "analyzeResult": {
        "readResults": [
          {"page": 1, "lines": [{"text": ..., "boundingBox": [8 numbers],
                                 "appearance": {"style": {"confidence": ...}}}]}
        ]
      }
    }
"""

from typing import Any, Dict, List, Optional

import aiohttp

from .base import BaseOcrEngine
from ..config.ocr_config import OcrSettings, ocr_settings
from ..core.models import ReadFailed, ReadLine, ReadOutcome, ReadPage, ReadPending, ReadSucceeded
from ..utils.exceptions import ConfigurationError, EngineSubmitError


SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OPERATION_LOCATION_HEADER = "Operation-Location"


def parse_read_result(payload: Dict[str, Any]) -> ReadOutcome:
    """
    Convert a Read operation body into a ReadOutcome.

    Unknown statuses are treated as still pending.
    """
    status = str(payload.get("status", "")).lower()

    if status == "failed":
        return ReadFailed(cause=payload.get("error") or payload)

    if status != "succeeded":
        return ReadPending(status=status or "unknown")

    read_results = (payload.get("analyzeResult") or {}).get("readResults") or []
    pages: List[ReadPage] = []
    for position, read_result in enumerate(read_results):
        lines = []
        for line in read_result.get("lines") or []:
            style = (line.get("appearance") or {}).get("style") or {}
            lines.append(ReadLine(
                text=line.get("text", ""),
                bounding_box=[float(v) for v in line.get("boundingBox") or []],
                confidence=style.get("confidence"),
            ))
        pages.append(ReadPage(index=read_result.get("page", position + 1), lines=lines))

    return ReadSucceeded(pages=pages)


class AzureReadEngine(BaseOcrEngine):
    """
    Azure Read API engine over aiohttp.

    The HTTP session is created lazily and reused across operations; one
    engine can serve many concurrent analyze calls.
    """

    def __init__(
        self,
        settings: Optional[OcrSettings] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__()
        self.settings = settings or ocr_settings
        self._session = session
        self._owns_session = session is None

    def _resolve(self, config: Optional[OcrSettings]) -> OcrSettings:
        settings = config or self.settings
        if not settings.AZURE_OCR_ENDPOINT or not settings.AZURE_OCR_KEY:
            raise ConfigurationError(
                "AZURE_OCR_ENDPOINT and AZURE_OCR_KEY must be set to use the Azure Read engine"
            )
        return settings

    def analyze_url(self, config: Optional[OcrSettings] = None) -> str:
        settings = config or self.settings
        endpoint = settings.AZURE_OCR_ENDPOINT.rstrip("/")
        return f"{endpoint}/vision/{settings.OCR_READ_API_VERSION}/read/analyze"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.OCR_REQUEST_TIMEOUT)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the session if this engine created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def submit(self, data: bytes, config: Optional[OcrSettings] = None) -> str:
        settings = self._resolve(config)
        session = await self._get_session()

        params = {}
        if settings.OCR_LANGUAGE:
            params["language"] = settings.OCR_LANGUAGE

        headers = {
            SUBSCRIPTION_KEY_HEADER: settings.AZURE_OCR_KEY,
            "Content-Type": "application/octet-stream",
        }

        async with session.post(self.analyze_url(settings), params=params, headers=headers, data=data) as response:
            if response.status != 202:
                body = await response.text()
                raise EngineSubmitError(
                    f"Read analyze rejected with status {response.status}: {body[:200]}",
                    status=response.status
                )

            handle = response.headers.get(OPERATION_LOCATION_HEADER)

        if not handle:
            raise EngineSubmitError("Read analyze accepted but returned no Operation-Location", status=202)

        self.logger.debug(f"Submitted {len(data)} bytes, operation {self.operation_id(handle)}")
        return handle

    async def poll(self, handle: str, config: Optional[OcrSettings] = None) -> ReadOutcome:
        settings = self._resolve(config)
        session = await self._get_session()
        headers = {SUBSCRIPTION_KEY_HEADER: settings.AZURE_OCR_KEY}

        async with session.get(handle, headers=headers) as response:
            response.raise_for_status()
            payload = await response.json()

        return parse_read_result(payload)

    def operation_id(self, handle: str) -> str:
        # Operation-Location ends in /analyzeResults/{operationId}
        return handle.rstrip("/").rsplit("/", 1)[-1]

