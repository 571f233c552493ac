# ============================================================================
# src/medication_scan/parsing/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Cleans up OCR lines before parsing:
- Collapses whitespace
- Lowercases
- Drops symbols except the ones dosages use (. % / -)
"""

import re
from typing import Iterable, List

from ..core.models import OcrFileResult

# Lines at or below this length after normalization are OCR noise
MIN_LINE_LENGTH = 2

_WHITESPACE = re.compile(r"\s+")
# \w alone would keep "_", which is not part of a label's text
_DISALLOWED = re.compile(r"[^\w\s.%/-]|_")


def normalize_text(line: str) -> str:
    """
    Canonicalize one OCR line.

    normalize_text(normalize_text(x)) == normalize_text(x) for any x.

    Args:
        line: Raw OCR text

    Returns:
        Lowercase, single-spaced text containing only letters, digits,
        whitespace and . % / -
    """
    text = _WHITESPACE.sub(" ", line)
    # Lowercase before filtering: case folding can emit combining marks
    text = text.lower()
    text = _DISALLOWED.sub("", text)
    # Removing a symbol between two spaces leaves a double space
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def is_meaningful(normalized: str) -> bool:
    return len(normalized) > MIN_LINE_LENGTH


def normalize_lines(lines: Iterable[str]) -> List[str]:
    """Normalize lines and drop the ones too short to carry information."""
    normalized = (normalize_text(line) for line in lines)
    return [text for text in normalized if is_meaningful(text)]


def build_corpus(results: Iterable[OcrFileResult]) -> List[str]:
    """
    Normalized line corpus across every file, in file then line order.
    """
    return normalize_lines(line.text for result in results for line in result.lines)
