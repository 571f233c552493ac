# ============================================================================
# FILE: tests/unit/test_backoff.py
# ============================================================================
"""
Unit tests for the exponential backoff policy
"""

import pytest

from medication_scan.core.backoff import calculate_backoff, MAX_DELAY_MS


@pytest.mark.parametrize("attempt,expected", [
    (0, 500),
    (1, 1000),
    (2, 2000),
    (3, 4000),
    (4, 4000),
    (10, 4000),
])
def test_backoff_values(attempt, expected):
    """Delay doubles from 500ms and stops at 4000ms"""
    assert calculate_backoff(attempt) == expected


def test_backoff_monotonic_and_capped():
    """delay(a2) >= delay(a1) for a2 > a1, never above the cap"""
    delays = [calculate_backoff(a) for a in range(200)]

    assert all(later >= earlier for earlier, later in zip(delays, delays[1:]))
    assert max(delays) <= MAX_DELAY_MS


def test_backoff_huge_attempt():
    """Very large attempt counts still return the cap"""
    assert calculate_backoff(10 ** 6) == MAX_DELAY_MS
