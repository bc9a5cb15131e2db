"""FFmpeg ``silencedetect`` log parsing."""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from ..logging import get_logger
from ..utils.timing import seconds_to_ms

LOGGER = get_logger("silence.parse")

_NUMBER = r"-?[0-9]+(?:\.[0-9]+)?"
_SILENCE_START_RE = re.compile(rf"silence_start:\s*(?P<start>{_NUMBER})")
_SILENCE_END_RE = re.compile(rf"silence_end:\s*(?P<end>{_NUMBER})")


def parse_silencedetect(log_lines: Iterable[str]) -> List[Tuple[int, int]]:
    """Parse FFmpeg silencedetect output into ``(start_ms, end_ms)`` pairs.

    Each ``silence_end`` is paired with the most recent unpaired
    ``silence_start``. Negative starts, which FFmpeg reports for silence at
    the very beginning of a stream, are clamped to zero. Pairs are returned in
    log order; validation and sorting happen in the detector.
    """
    pairs: List[Tuple[int, int]] = []
    current_start: float | None = None
    for raw_line in log_lines:
        line = raw_line.strip()
        start_match = _SILENCE_START_RE.search(line)
        if start_match:
            current_start = max(0.0, float(start_match.group("start")))
            continue
        end_match = _SILENCE_END_RE.search(line)
        if end_match:
            if current_start is None:
                LOGGER.debug("Ignoring silence_end without a start: %s", line)
                continue
            end = float(end_match.group("end"))
            pairs.append((seconds_to_ms(current_start), seconds_to_ms(end)))
            current_start = None
    if current_start is not None:
        LOGGER.debug("Ignoring unterminated silence starting at %.3fs", current_start)
    return pairs


__all__ = ["parse_silencedetect"]
