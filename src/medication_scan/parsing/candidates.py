# ============================================================================
# src/medication_scan/parsing/candidates.py
# ============================================================================
"""
Drug Name Candidate Extraction

A candidate is what remains of a normalized line once dosage-looking text is
cut out, provided the remainder still looks like a name. Candidates are only
hypotheses; the vocabulary lookup decides which are real drugs.
"""

import re
from typing import Iterable, List

from ..constants.units import units_longest_first

_UNIT_WORDS = "|".join(units_longest_first())

# Coarse dosage shape: a number, its unit letters if any, and any unit or
# dose-form words that follow ("500 mg tablet", "1/2 tab", "10ml")
DOSAGE_SHAPE = re.compile(
    rf"\d+(?:\.\d+)?(?:/\d+)?\.?(?:\s*[a-z]+)?(?:\s+(?:{_UNIT_WORDS})s?\b)*",
    re.IGNORECASE
)

CANDIDATE_SHAPE = re.compile(r"[a-z0-9\s-]{3,}")

_WHITESPACE = re.compile(r"\s+")


def strip_dosages(line: str) -> str:
    """Remove dosage-shaped substrings from a normalized line."""
    stripped = DOSAGE_SHAPE.sub(" ", line)
    return _WHITESPACE.sub(" ", stripped).strip()


def extract_candidates(corpus: Iterable[str]) -> List[str]:
    """
    Unique candidate names in first-seen order.

    Args:
        corpus: Normalized lines

    Returns:
        Deduplicated candidates, each matching ^[a-z0-9\\s-]{3,}$
    """
    seen = {}
    for line in corpus:
        candidate = strip_dosages(line)
        if CANDIDATE_SHAPE.fullmatch(candidate) and candidate not in seen:
            seen[candidate] = None
    return list(seen)
