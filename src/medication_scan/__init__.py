# ============================================================================
# src/medication_scan/__init__.py
# ============================================================================
"""
Medication Label Scanner

Reads medication labels (photos or PDFs) with an asynchronous OCR engine and
turns the noisy line output into structured medications:
- OCR job client with polling, timeout and retry (Azure Read)
- Text normalization, name candidates and dosage parsing
- Name confirmation against RxNav and per-drug aggregation
"""

__version__ = "1.0.0"

from .core.models import SourceFile, ResolvedMedication, MedicationAnalysis
from .core.pipeline import MedicationLabelAnalyzer, create_analyzer

__all__ = [
    "SourceFile",
    "ResolvedMedication",
    "MedicationAnalysis",
    "MedicationLabelAnalyzer",
    "create_analyzer",
]
