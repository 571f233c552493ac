# ============================================================================
# src/medication_scan/parsing/__init__.py
# ============================================================================
"""
Label text parsing: normalization, name candidates and dosages.
"""

from .text_normalizer import normalize_text, normalize_lines, build_corpus
from .candidates import extract_candidates, strip_dosages
from .dosage import extract_dosages, parse_dosage_value, build_dosage_pattern

__all__ = [
    "normalize_text",
    "normalize_lines",
    "build_corpus",
    "extract_candidates",
    "strip_dosages",
    "extract_dosages",
    "parse_dosage_value",
    "build_dosage_pattern",
]
