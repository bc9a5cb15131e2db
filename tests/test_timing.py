"""Tests for time conversion helpers."""

from __future__ import annotations

from cmdetect.utils.timing import format_timestamp, ms_to_seconds, seconds_to_ms


def test_seconds_to_ms_rounds() -> None:
    assert seconds_to_ms(1.001) == 1001
    assert seconds_to_ms(0.0004) == 0


def test_ms_to_seconds() -> None:
    assert ms_to_seconds(95_100) == 95.1


def test_format_timestamp() -> None:
    assert format_timestamp(3_723_045) == "01:02:03.045"
    assert format_timestamp(-5) == "00:00:00.000"
