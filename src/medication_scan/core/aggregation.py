# ============================================================================
# src/medication_scan/core/aggregation.py
# ============================================================================
"""
Name Resolution & Aggregation

Confirms candidates against the drug vocabulary and assembles the final
medication list. The pairing rules are heuristics for OCR text, not exact
associations:
- Dosage: prefer a match on a line containing the name, else the first
  dosage anywhere in the batch (right only for single-drug documents).
- Lines: an image that mentions the name contributes ALL of its raw lines,
  since labels often split name and strength across lines.
- Two spellings that resolve to the same drug stay separate entries.
"""

import asyncio
import logging
from typing import Any, Iterable, List, Optional, Sequence

from .models import DosageMatch, DrugRecord, OcrFileResult, ResolvedMedication
from ..parsing.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


def select_dosage(name: str, dosage_matches: Sequence[DosageMatch]) -> Optional[DosageMatch]:
    """First same-line dosage for the name, else the first dosage overall."""
    needle = name.lower()
    for match in dosage_matches:
        if needle in match.context:
            return match
    return dosage_matches[0] if dosage_matches else None


def attribute_lines(name: str, results: Iterable[OcrFileResult]) -> List[str]:
    """Raw lines of every file whose normalized text mentions the name."""
    needle = name.lower()
    lines: List[str] = []
    for result in results:
        if any(needle in normalize_text(line.text) for line in result.lines):
            lines.extend(line.text for line in result.lines)
    return lines


async def _lookup(vocabulary: Any, candidate: str) -> List[DrugRecord]:
    try:
        return await vocabulary.search(candidate)
    except Exception as e:
        logger.warning(f"Vocabulary lookup failed for '{candidate}', treating as no match: {e}")
        return []


async def resolve_and_aggregate(
    candidates: Sequence[str],
    dosage_matches: Sequence[DosageMatch],
    results: Sequence[OcrFileResult],
    vocabulary: Any
) -> List[ResolvedMedication]:
    """
    Build the medication list from candidates the vocabulary recognizes.

    Args:
        candidates: Candidate names in first-seen order
        dosage_matches: Dosages across the whole corpus
        results: Per-file OCR results, for line attribution
        vocabulary: Object with `async search(name) -> list of records`

    Returns:
        One ResolvedMedication per recognized candidate, in candidate order
    """
    lookups = await asyncio.gather(*(_lookup(vocabulary, c) for c in candidates))

    medications: List[ResolvedMedication] = []
    for candidate, records in zip(candidates, lookups):
        if not records:
            continue

        dosage = select_dosage(candidate, dosage_matches)
        medications.append(ResolvedMedication(
            name=candidate,
            dosage=dosage.value if dosage else None,
            measurement=dosage.unit if dosage else None,
            ocr_lines=attribute_lines(candidate, results),
        ))

    logger.info(f"Resolved {len(medications)} of {len(candidates)} candidate(s)")
    return medications
