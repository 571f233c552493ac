# ============================================================================
# src/medication_scan/core/backoff.py
# ============================================================================
"""
Exponential backoff used between OCR polls and between whole-sequence retries.
"""

BASE_DELAY_MS = 500
MAX_DELAY_MS = 4000


def calculate_backoff(attempt: int) -> int:
    """
    Delay before the next poll or retry.

    Args:
        attempt: Zero-based attempt counter

    Returns:
        min(500 * 2**attempt, 4000) in milliseconds
    """
    # The cap is reached at exponent 3
    exponent = min(max(attempt, 0), 16)
    return min(BASE_DELAY_MS * 2 ** exponent, MAX_DELAY_MS)
