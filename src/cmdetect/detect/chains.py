"""Candidate chains of silences and the linear chain builder."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .gaps import GapClassifier, GapLabel
from .intervals import SilenceInterval


@dataclass(frozen=True, slots=True)
class Chain:
    """An ordered run of silences with the label of every internal gap."""

    intervals: Tuple[SilenceInterval, ...]
    labels: Tuple[GapLabel, ...]

    def __post_init__(self) -> None:
        if not self.intervals:
            raise ValueError("A chain needs at least one interval")
        if len(self.labels) != len(self.intervals) - 1:
            raise ValueError("A chain needs exactly one label per internal gap")

    @property
    def first(self) -> SilenceInterval:
        return self.intervals[0]

    @property
    def last(self) -> SilenceInterval:
        return self.intervals[-1]

    @property
    def start_ms(self) -> int:
        return self.first.midpoint_ms

    @property
    def end_ms(self) -> int:
        return self.last.midpoint_ms

    @property
    def total_duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def standard_unit_count(self) -> int:
        return sum(1 for label in self.labels if label.is_standard)

    def joined(self, other: "Chain", label: GapLabel) -> "Chain":
        """Return this chain followed by ``other``, linked by ``label``."""
        return Chain(self.intervals + other.intervals, self.labels + (label,) + other.labels)

    def prepended(self, interval: SilenceInterval, label: GapLabel) -> "Chain":
        return Chain((interval,) + self.intervals, (label,) + self.labels)

    def appended(self, interval: SilenceInterval, label: GapLabel) -> "Chain":
        return Chain(self.intervals + (interval,), self.labels + (label,))


class ChainState(enum.Enum):
    IDLE = "idle"
    OPEN = "open"


class ChainBuilder:
    """Group chronologically ordered silences into candidate chains.

    Intervals may be fed one at a time as they arrive. The builder keeps only
    the currently open chain; it is handed back once a ``Break`` gap (or the
    end of input) closes it and it has at least one internal gap.
    """

    def __init__(self, classifier: GapClassifier) -> None:
        self._classifier = classifier
        self._state = ChainState.IDLE
        self._members: List[SilenceInterval] = []
        self._labels: List[GapLabel] = []

    @property
    def state(self) -> ChainState:
        return self._state

    def feed(self, interval: SilenceInterval) -> Optional[Chain]:
        """Consume the next interval, returning a chain if one was closed."""
        if self._state is ChainState.IDLE:
            self._open(interval)
            return None

        label = self._classifier.between(self._members[-1], interval)
        if label.links:
            self._members.append(interval)
            self._labels.append(label)
            return None

        closed = self._emit()
        self._open(interval)
        return closed

    def close(self) -> Optional[Chain]:
        """Flush the open chain at end of input."""
        closed = self._emit()
        self._members = []
        self._labels = []
        self._state = ChainState.IDLE
        return closed

    def _open(self, interval: SilenceInterval) -> None:
        self._members = [interval]
        self._labels = []
        self._state = ChainState.OPEN

    def _emit(self) -> Optional[Chain]:
        if len(self._members) < 2:
            return None
        return Chain(tuple(self._members), tuple(self._labels))


def build_chains(intervals: Iterable[SilenceInterval], classifier: GapClassifier) -> List[Chain]:
    """Return every candidate chain in ``intervals`` in chronological order."""
    builder = ChainBuilder(classifier)
    chains: List[Chain] = []
    for interval in intervals:
        closed = builder.feed(interval)
        if closed is not None:
            chains.append(closed)
    closed = builder.close()
    if closed is not None:
        chains.append(closed)
    return chains


__all__ = ["Chain", "ChainState", "ChainBuilder", "build_chains"]
