# ============================================================================
# src/medication_scan/constants/units.py
# ============================================================================
"""
Dose measurement units recognized on medication labels.
"""

from enum import Enum
from typing import List


class MeasurementUnit(str, Enum):
    # Weight
    MG = "mg"
    MCG = "mcg"
    G = "g"
    KG = "kg"

    # Volume
    ML = "ml"
    L = "l"

    # Units / counts
    UNIT = "unit"
    TABLET = "tablet"
    CAPSULE = "capsule"
    DROP = "drop"
    SPRAY = "spray"
    PUFF = "puff"
    PATCH = "patch"
    SUPPOSITORY = "suppository"
    AMPULE = "ampule"
    VIAL = "vial"

    # Dose forms
    DOSE = "dose"
    INJECTION = "injection"
    SUSPENSION = "suspension"
    SOLUTION = "solution"
    CREAM = "cream"
    GEL = "gel"
    OINTMENT = "ointment"


def units_longest_first() -> List[str]:
    """
    Unit strings ordered by length, longest first.

    Regex alternation tries alternatives left to right, so a short unit
    must come after every longer unit that contains it ("g" after "mg").
    """
    return sorted((unit.value for unit in MeasurementUnit), key=len, reverse=True)
