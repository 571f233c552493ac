# ============================================================================
# src/medication_scan/parsing/dosage.py
# ============================================================================
"""
Dosage / Unit Extraction

Finds (value, unit) pairs such as "500 mg", "0.5mg", "2 tablets" and
"1/2 tablet" in normalized lines.
"""

import logging
import re
from typing import Iterable, List, Optional, Pattern

from ..constants.units import MeasurementUnit, units_longest_first
from ..core.models import DosageMatch

logger = logging.getLogger(__name__)


def build_dosage_pattern() -> Pattern[str]:
    """
    Compile the unit-aware dosage grammar.

    Group 1 is the value (decimal or fraction), group 2 the unit. A unit may
    carry a plural "s" and must be followed by whitespace, end of line or one
    of , ; : .
    """
    units = "|".join(re.escape(unit) for unit in units_longest_first())
    return re.compile(
        rf"(\d+(?:\.\d+)?(?:/\d+)?)\s*({units})s?(?=\s|$|[,;:.])",
        re.IGNORECASE
    )


DOSAGE_PATTERN = build_dosage_pattern()


def parse_dosage_value(raw: str) -> Optional[float]:
    """
    Parse "500", "0.5" or "1/2" into a float.

    Returns:
        The value, or None when a fraction is missing a side or divides by 0
    """
    if "/" in raw:
        numerator, _, denominator = raw.partition("/")
        if not numerator or not denominator:
            return None
        try:
            return float(numerator) / float(denominator)
        except (ValueError, ZeroDivisionError):
            return None

    try:
        return float(raw)
    except ValueError:
        return None


def extract_dosages(corpus: Iterable[str]) -> List[DosageMatch]:
    """
    Every dosage mention in the corpus, in line order then position order.

    Args:
        corpus: Normalized lines

    Returns:
        DosageMatch per regex match; each keeps its line as context
    """
    matches: List[DosageMatch] = []
    for line in corpus:
        for match in DOSAGE_PATTERN.finditer(line):
            value = parse_dosage_value(match.group(1))
            if value is None:
                logger.debug(f"Skipping malformed dosage '{match.group(0)}' in '{line}'")
                continue
            matches.append(DosageMatch(
                value=value,
                unit=MeasurementUnit(match.group(2).lower()),
                context=line,
            ))
    return matches
