"""Tests for silence interval validation and normalization."""

from __future__ import annotations

import pytest

from cmdetect.detect import MalformedInterval, SilenceInterval, normalize_intervals


def test_interval_rejects_inverted_range() -> None:
    with pytest.raises(MalformedInterval):
        SilenceInterval(2000, 2000)
    with pytest.raises(MalformedInterval):
        SilenceInterval(-5, 100)


def test_midpoint_uses_floor_division() -> None:
    assert SilenceInterval(3000, 3401).midpoint_ms == 3200
    assert SilenceInterval(0, 1).midpoint_ms == 0


def test_normalize_sorts_and_collapses_duplicates() -> None:
    raw = [(30_000, 30_400), (1_000, 1_500), (30_000, 30_400), (1_000, 1_200)]
    assert normalize_intervals(raw) == [
        SilenceInterval(1_000, 1_200),
        SilenceInterval(1_000, 1_500),
        SilenceInterval(30_000, 30_400),
    ]


def test_normalize_drops_malformed() -> None:
    raw = [(5_000, 4_000), (6_000, 6_000), (7_000, 7_300)]
    assert normalize_intervals(raw) == [SilenceInterval(7_000, 7_300)]


def test_normalize_accepts_serialized_segments() -> None:
    raw = [
        {"start_ms": 200, "end_ms": 600, "duration_ms": 400},
        SilenceInterval(100, 150),
    ]
    assert normalize_intervals(raw) == [SilenceInterval(100, 150), SilenceInterval(200, 600)]


def test_normalize_empty() -> None:
    assert normalize_intervals([]) == []
