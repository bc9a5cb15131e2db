"""Commercial block acceptance and result assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..config import BlockConfig
from ..utils.timing import ms_to_seconds
from .chains import Chain
from .intervals import SilenceInterval


@dataclass(frozen=True, slots=True)
class Segment:
    """One spot inside a commercial block, bounded by silence midpoints."""

    start_ms: int
    end_ms: int

    @property
    def duration_sec(self) -> float:
        return ms_to_seconds(self.end_ms - self.start_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {"start_ms": self.start_ms, "end_ms": self.end_ms, "duration_sec": self.duration_sec}


@dataclass(frozen=True, slots=True)
class CMBlock:
    start_ms: int
    end_ms: int
    segments: tuple[Segment, ...] = ()

    @property
    def duration_sec(self) -> float:
        return ms_to_seconds(self.end_ms - self.start_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "duration_sec": self.duration_sec,
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass(slots=True)
class DetectionResult:
    cm_blocks: List[CMBlock] = field(default_factory=list)
    silence_segments: List[SilenceInterval] = field(default_factory=list)
    start_offset_ms: int = 0

    def to_dict(self, input_file: str) -> Dict[str, Any]:
        return {
            "input_file": input_file,
            "cm_blocks": [block.to_dict() for block in self.cm_blocks],
            "silence_segments": [interval.to_dict() for interval in self.silence_segments],
            "start_offset_ms": self.start_offset_ms,
        }


class BlockFilter:
    """Decide whether a post-processed chain is a commercial block."""

    def __init__(self, config: BlockConfig | None = None) -> None:
        config = config or BlockConfig()
        self._min_ms = config.min_duration_sec * 1000
        self._max_ms = config.max_duration_sec * 1000
        self._min_standard = config.min_standard_units

    def rejection_reason(self, chain: Chain) -> Optional[str]:
        """Return why ``chain`` is rejected, or ``None`` when it is accepted."""
        duration = chain.total_duration_ms
        if duration < self._min_ms:
            return f"too short ({duration}ms)"
        if duration > self._max_ms:
            return f"too long ({duration}ms)"
        if chain.standard_unit_count < self._min_standard:
            return f"only {chain.standard_unit_count} standard unit(s)"
        return None


def build_block(chain: Chain) -> CMBlock:
    """Turn an accepted chain into a block with one segment per internal gap."""
    midpoints = [interval.midpoint_ms for interval in chain.intervals]
    segments = tuple(Segment(start, end) for start, end in zip(midpoints, midpoints[1:]))
    return CMBlock(start_ms=midpoints[0], end_ms=midpoints[-1], segments=segments)


def estimate_start_offset(intervals: Sequence[SilenceInterval]) -> int:
    """Return the midpoint of the first silence, taken as where the programme begins."""
    if not intervals:
        return 0
    return max(0, intervals[0].midpoint_ms)


__all__ = [
    "Segment",
    "CMBlock",
    "DetectionResult",
    "BlockFilter",
    "build_block",
    "estimate_start_offset",
]
