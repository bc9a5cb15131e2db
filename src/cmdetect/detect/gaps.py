"""Classification of the spacing between consecutive silence midpoints.

Commercial spots are produced in fixed lengths, and the silence separating
two spots sits near the spot boundary. The distance between the midpoints of
two silences therefore approximates the length of the spot between them:

* ``STANDARD`` spacings match a 15 second multiple (15/30/45/60/75s).
* ``SHORT`` spacings match a 5 or 10 second spot. They link silences into a
  chain but never count towards a block's standard unit total.
* ``BREAK`` is everything else, including any spacing at or above the break
  threshold (90s by default).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from ..config import GapConfig
from .intervals import SilenceInterval


STANDARD_STEP_SEC = 15


class GapKind(enum.Enum):
    STANDARD = "standard"
    SHORT = "short"
    BREAK = "break"


@dataclass(frozen=True, slots=True)
class GapLabel:
    """A gap kind plus the matched unit length in seconds (``None`` for a break)."""

    kind: GapKind
    unit_sec: Optional[float] = None

    @classmethod
    def standard(cls, unit_sec: float) -> "GapLabel":
        return cls(GapKind.STANDARD, unit_sec)

    @classmethod
    def short(cls, unit_sec: float) -> "GapLabel":
        return cls(GapKind.SHORT, unit_sec)

    @property
    def is_standard(self) -> bool:
        return self.kind is GapKind.STANDARD

    @property
    def is_short(self) -> bool:
        return self.kind is GapKind.SHORT

    @property
    def multiple(self) -> Optional[int]:
        """The n of a standard unit of 15*n seconds, else ``None``."""
        if not self.is_standard or self.unit_sec is None:
            return None
        n, remainder = divmod(self.unit_sec, STANDARD_STEP_SEC)
        return int(n) if remainder == 0 else None

    @property
    def links(self) -> bool:
        """True when the gap keeps two silences in the same chain."""
        return self.kind is not GapKind.BREAK

    def __str__(self) -> str:
        if self.kind is GapKind.BREAK:
            return "Break"
        prefix = "StandardUnit" if self.is_standard else "ShortUnit"
        return f"{prefix}({self.unit_sec:g}s)"


BREAK = GapLabel(GapKind.BREAK)


class GapClassifier:
    """Label midpoint spacings according to a :class:`GapConfig`."""

    def __init__(self, config: GapConfig | None = None) -> None:
        config = config or GapConfig()
        self._tolerance_ms = config.tolerance_ms
        self._break_ms = config.break_threshold_sec * 1000
        # Smallest unit first so an (unreachable) double match resolves to it.
        self._standard = sorted((int(round(u * 1000)), u) for u in config.standard_units_sec)
        self._short = sorted((int(round(u * 1000)), u) for u in config.short_units_sec)

    def _match(self, spacing_ms: float, units: list[tuple[int, float]]) -> Optional[float]:
        for unit_ms, unit_sec in units:
            if abs(spacing_ms - unit_ms) <= self._tolerance_ms:
                return unit_sec
        return None

    def classify(self, spacing_ms: float) -> GapLabel:
        """Return the label for a midpoint-to-midpoint spacing in milliseconds."""
        if spacing_ms <= 0 or spacing_ms >= self._break_ms:
            return BREAK
        unit = self._match(spacing_ms, self._standard)
        if unit is not None:
            return GapLabel.standard(unit)
        unit = self._match(spacing_ms, self._short)
        if unit is not None:
            return GapLabel.short(unit)
        return BREAK

    def between(self, earlier: SilenceInterval, later: SilenceInterval) -> GapLabel:
        return self.classify(later.midpoint_ms - earlier.midpoint_ms)


__all__ = ["GapKind", "GapLabel", "BREAK", "GapClassifier"]
