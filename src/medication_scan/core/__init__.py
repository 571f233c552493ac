# ============================================================================
# src/medication_scan/core/__init__.py
# ============================================================================
"""
Core data model, backoff policy, aggregation and pipeline.
"""

from .backoff import calculate_backoff
from .models import (
    SourceFile,
    OcrLine,
    OcrFileResult,
    DosageMatch,
    DrugRecord,
    ResolvedMedication,
    MedicationAnalysis,
    ReadLine,
    ReadPage,
    ReadPending,
    ReadSucceeded,
    ReadFailed,
    ReadOutcome,
)
from .aggregation import resolve_and_aggregate, select_dosage, attribute_lines

__all__ = [
    "calculate_backoff",
    "SourceFile",
    "OcrLine",
    "OcrFileResult",
    "DosageMatch",
    "DrugRecord",
    "ResolvedMedication",
    "MedicationAnalysis",
    "ReadLine",
    "ReadPage",
    "ReadPending",
    "ReadSucceeded",
    "ReadFailed",
    "ReadOutcome",
    "resolve_and_aggregate",
    "select_dosage",
    "attribute_lines",
]
