"""Commercial block detection over a sequence of silence intervals."""

from __future__ import annotations

from typing import Any, Iterable, List

from ..config import DetectorConfig
from ..logging import get_logger
from .blocks import BlockFilter, CMBlock, DetectionResult, build_block, estimate_start_offset
from .chains import Chain, build_chains
from .gaps import GapClassifier
from .intervals import normalize_intervals
from .postprocess import ChainPostProcessor

LOGGER = get_logger("detect.engine")


class CMDetector:
    """Pure, deterministic mapping from silence intervals to commercial blocks."""

    def __init__(self, config: DetectorConfig | None = None) -> None:
        self._config = config or DetectorConfig()
        self._classifier = GapClassifier(self._config.gaps)
        self._post = ChainPostProcessor(self._classifier)
        self._filter = BlockFilter(self._config.blocks)

    def _select(self, chains: Iterable[Chain]) -> List[CMBlock]:
        blocks: List[CMBlock] = []
        for chain in chains:
            reason = self._filter.rejection_reason(chain)
            if reason is not None:
                LOGGER.debug("Rejecting chain %d-%dms: %s", chain.start_ms, chain.end_ms, reason)
                continue
            if blocks and chain.start_ms < blocks[-1].end_ms:
                LOGGER.debug("Rejecting chain %d-%dms: overlaps previous block", chain.start_ms, chain.end_ms)
                continue
            blocks.append(build_block(chain))
        return blocks

    def detect(self, raw_intervals: Iterable[Any]) -> DetectionResult:
        intervals = normalize_intervals(raw_intervals)
        candidates = build_chains(intervals, self._classifier)
        LOGGER.debug("Built %d candidate chain(s)", len(candidates))
        chains = self._post.process(candidates, intervals)
        blocks = self._select(chains)
        return DetectionResult(
            cm_blocks=blocks,
            silence_segments=intervals,
            start_offset_ms=estimate_start_offset(intervals),
        )


def detect(raw_intervals: Iterable[Any], config: DetectorConfig | None = None) -> DetectionResult:
    """Detect commercial blocks in ``raw_intervals`` (``(start_ms, end_ms)`` pairs)."""
    return CMDetector(config).detect(raw_intervals)


__all__ = ["CMDetector", "detect"]
