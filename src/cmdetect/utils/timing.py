"""Time conversion helpers."""

from __future__ import annotations


def seconds_to_ms(value: float) -> int:
    """Convert seconds to whole milliseconds, rounding to the nearest."""
    return int(round(value * 1000))


def ms_to_seconds(value: int) -> float:
    return value / 1000


def format_timestamp(value_ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS.mmm``."""
    if value_ms < 0:
        value_ms = 0
    hours, remainder = divmod(value_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    seconds, milliseconds = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"


__all__ = ["seconds_to_ms", "ms_to_seconds", "format_timestamp"]
