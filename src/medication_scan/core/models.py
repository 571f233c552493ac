# ============================================================================
# src/medication_scan/core/models.py
# ============================================================================
"""
Data model for one label-scanning run.

Everything here is created fresh per call and discarded once the result is
handed back; nothing is persisted.

Two groups:
- Engine adapter results (ReadPending / ReadSucceeded / ReadFailed): the only
  shape the OCR client sees from an engine, so no stage past the adapter
  touches raw engine JSON.
- Pipeline records (OcrLine, OcrFileResult, DosageMatch, ResolvedMedication).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..constants.units import MeasurementUnit


# ============================================================================
# Inputs
# ============================================================================

@dataclass(frozen=True)
class SourceFile:
    """An image or PDF handed in by the caller."""
    data: bytes
    filename: Optional[str] = None


# ============================================================================
# Engine adapter boundary
# ============================================================================

@dataclass(frozen=True)
class ReadLine:
    text: str
    bounding_box: List[float] = field(default_factory=list)
    confidence: Optional[float] = None


@dataclass(frozen=True)
class ReadPage:
    index: int
    lines: List[ReadLine] = field(default_factory=list)


@dataclass(frozen=True)
class ReadPending:
    """Operation still queued or running."""
    status: str = "running"


@dataclass(frozen=True)
class ReadSucceeded:
    pages: List[ReadPage] = field(default_factory=list)


@dataclass(frozen=True)
class ReadFailed:
    """Engine gave up on the operation; cause is whatever it reported."""
    cause: Any = None


ReadOutcome = Union[ReadPending, ReadSucceeded, ReadFailed]


# ============================================================================
# OCR output
# ============================================================================

@dataclass(frozen=True)
class OcrLine:
    """One positioned line of text on one page."""
    text: str
    bounding_box: List[float]  # 4 (x, y, w, h) or 8 (quad corners) numbers
    page: int
    confidence: Optional[float] = None


@dataclass(frozen=True)
class OcrFileResult:
    """All lines recovered from one SourceFile, in page order."""
    filename: Optional[str]
    lines: List[OcrLine]
    total_lines: int
    pages: int

    @classmethod
    def from_pages(cls, pages: List[ReadPage], filename: Optional[str] = None) -> "OcrFileResult":
        lines = [
            OcrLine(
                text=line.text,
                bounding_box=list(line.bounding_box),
                page=page.index,
                confidence=line.confidence,
            )
            for page in pages
            for line in page.lines
        ]
        return cls(filename=filename, lines=lines, total_lines=len(lines), pages=len(pages))


# ============================================================================
# Parsing / resolution
# ============================================================================

@dataclass(frozen=True)
class DosageMatch:
    value: float
    unit: MeasurementUnit
    context: str  # normalized line the match came from


@dataclass(frozen=True)
class DrugRecord:
    """One concept returned by the drug vocabulary."""
    rxcui: Optional[str] = None
    name: Optional[str] = None
    synonym: Optional[str] = None
    tty: Optional[str] = None
    language: Optional[str] = None


@dataclass
class ResolvedMedication:
    """
    A candidate name confirmed by the vocabulary.

    `name` is the candidate as read from the label, not the vocabulary's
    canonical name. `ocr_lines` holds every raw line of every image that
    mentions the name.
    """
    name: str
    dosage: Optional[float] = None
    measurement: Optional[MeasurementUnit] = None
    ocr_lines: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dosage": self.dosage,
            "measurement": self.measurement.value if self.measurement else None,
            "ocrLines": list(self.ocr_lines),
        }


@dataclass
class MedicationAnalysis:
    medications: List[ResolvedMedication] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"medications": [m.to_dict() for m in self.medications]}
