# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for the Medication Label Scanner

Run with:
    uvicorn api.main:app --port 8000
"""

import base64
import binascii
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from medication_scan import MedicationLabelAnalyzer, SourceFile, create_analyzer
from medication_scan.config import logging_settings
from medication_scan.utils import MedicationScanError, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared analyzer at startup and release its sessions on shutdown."""
    setup_logging(
        level=logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_FORMAT_JSON,
    )
    app.state.analyzer = create_analyzer()
    logger.info("Medication label analyzer ready")
    yield
    await app.state.analyzer.close()


app = FastAPI(
    title="Medication Label Scanner API",
    description="OCR medication labels and return recognized drugs with dosages",
    version="1.0.0",
    lifespan=lifespan,
)


# ============================================================================
# Models
# ============================================================================

class UploadedFile(BaseModel):
    data: str  # base64-encoded image or PDF
    filename: Optional[str] = None


class AnalyzeImagesRequest(BaseModel):
    files: List[UploadedFile] = Field(..., min_length=1)


class MedicationResponse(BaseModel):
    name: str
    dosage: Optional[float] = None
    measurement: Optional[str] = None
    ocrLines: List[str] = []


class AnalyzeImagesResponse(BaseModel):
    medications: List[MedicationResponse]


def get_analyzer(request: Request) -> MedicationLabelAnalyzer:
    return request.app.state.analyzer


def _decode_files(files: List[UploadedFile]) -> List[SourceFile]:
    decoded = []
    for index, upload in enumerate(files):
        try:
            data = base64.b64decode(upload.data, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(
                status_code=400,
                detail=f"File {upload.filename or index} is not valid base64"
            )
        decoded.append(SourceFile(data=data, filename=upload.filename))
    return decoded


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/api/health")
async def health():
    """Health check for monitoring."""
    return {"status": "healthy"}


@app.post("/api/ocr/analyze-images", response_model=AnalyzeImagesResponse)
async def analyze_images(
    payload: AnalyzeImagesRequest,
    analyzer: MedicationLabelAnalyzer = Depends(get_analyzer)
):
    """
    OCR the uploaded labels and return recognized medications.

    Partial OCR failures still return 200 with whatever could be read;
    502 means no file could be read at all.
    """
    files = _decode_files(payload.files)

    try:
        analysis = await analyzer.analyze_medication_images(files)
    except MedicationScanError as e:
        logger.error(f"Label analysis failed for {len(files)} file(s): {e}")
        raise HTTPException(status_code=502, detail=f"OCR failed: {e}")

    return analysis.to_dict()
