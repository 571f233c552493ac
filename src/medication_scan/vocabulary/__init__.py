# ============================================================================
# src/medication_scan/vocabulary/__init__.py
# ============================================================================
"""
Drug name vocabularies used to confirm OCR candidates.
"""

from .rxnav import RxNavClient, parse_search_response, parse_properties_response

__all__ = ["RxNavClient", "parse_search_response", "parse_properties_response"]
