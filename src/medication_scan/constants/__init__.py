# ============================================================================
# src/medication_scan/constants/__init__.py
# ============================================================================
"""
Static reference data for label parsing.
"""

from .units import MeasurementUnit, units_longest_first

__all__ = ["MeasurementUnit", "units_longest_first"]
