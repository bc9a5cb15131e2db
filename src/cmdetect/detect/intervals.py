"""Silence interval model and normalization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

from ..logging import get_logger

LOGGER = get_logger("detect.intervals")


class MalformedInterval(ValueError):
    """Raised for an interval with a negative start or ``end_ms <= start_ms``."""


@dataclass(frozen=True, slots=True, order=True)
class SilenceInterval:
    """A detected silence span in milliseconds."""

    start_ms: int
    end_ms: int

    def __post_init__(self) -> None:
        if self.start_ms < 0:
            raise MalformedInterval(f"Silence start ({self.start_ms}) must be >= 0")
        if self.end_ms <= self.start_ms:
            raise MalformedInterval(
                f"Silence end ({self.end_ms}) must be > start ({self.start_ms})"
            )

    @property
    def midpoint_ms(self) -> int:
        return (self.start_ms + self.end_ms) // 2

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    def to_dict(self) -> dict[str, int]:
        return {
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "duration_ms": self.duration_ms,
        }


def _coerce(raw: Any) -> SilenceInterval:
    if isinstance(raw, SilenceInterval):
        return raw
    if isinstance(raw, dict):
        return SilenceInterval(int(raw["start_ms"]), int(raw["end_ms"]))
    start, end = raw
    return SilenceInterval(int(start), int(end))


def normalize_intervals(raw_intervals: Iterable[Any]) -> List[SilenceInterval]:
    """Return the intervals sorted by start, malformed ones dropped, duplicates collapsed.

    Accepts ``(start_ms, end_ms)`` pairs, ``SilenceInterval`` objects or the
    dictionaries found in a serialized result's ``silence_segments``.
    """
    valid: set[SilenceInterval] = set()
    dropped = 0
    for raw in raw_intervals:
        try:
            valid.add(_coerce(raw))
        except MalformedInterval as exc:
            dropped += 1
            LOGGER.debug("Dropping malformed interval %r: %s", raw, exc)
    if dropped:
        LOGGER.debug("Dropped %d malformed interval(s)", dropped)
    return sorted(valid)


__all__ = ["MalformedInterval", "SilenceInterval", "normalize_intervals"]
