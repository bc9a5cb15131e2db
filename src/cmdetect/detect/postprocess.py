"""Merge and boundary extension of candidate chains over short-unit gaps."""

from __future__ import annotations

from typing import Dict, List, Sequence, Set

from ..logging import get_logger
from .chains import Chain
from .gaps import GapClassifier
from .intervals import SilenceInterval

LOGGER = get_logger("detect.postprocess")


class ChainPostProcessor:
    """Unify chains separated by a short spot, then pull in short spots at the edges.

    The merge pass always runs before the extension pass. Rounds repeat until
    neither pass changes anything.
    """

    def __init__(self, classifier: GapClassifier) -> None:
        self._classifier = classifier

    def process(self, chains: Sequence[Chain], intervals: Sequence[SilenceInterval]) -> List[Chain]:
        current = list(chains)
        while True:
            updated = self.extend(self.merge(current), intervals)
            if updated == current:
                return current
            current = updated

    def merge(self, chains: Sequence[Chain]) -> List[Chain]:
        """Join consecutive chains whose facing members are a short unit apart.

        Stray silences between the two chains belong to neither and are not
        absorbed.
        """
        merged: List[Chain] = []
        for chain in chains:
            if merged:
                label = self._classifier.between(merged[-1].last, chain.first)
                if label.is_short:
                    LOGGER.debug(
                        "Merging chains at %dms and %dms over %s",
                        merged[-1].end_ms,
                        chain.start_ms,
                        label,
                    )
                    merged[-1] = merged[-1].joined(chain, label)
                    continue
            merged.append(chain)
        return merged

    def extend(self, chains: Sequence[Chain], intervals: Sequence[SilenceInterval]) -> List[Chain]:
        """Absorb neighbouring silences a short unit away from either chain boundary.

        A neighbour already claimed by another chain is left alone.
        """
        position: Dict[SilenceInterval, int] = {interval: index for index, interval in enumerate(intervals)}
        claimed: Set[SilenceInterval] = {member for chain in chains for member in chain.intervals}
        extended: List[Chain] = []
        for chain in chains:
            chain = self._extend_backward(chain, intervals, position, claimed)
            chain = self._extend_forward(chain, intervals, position, claimed)
            extended.append(chain)
        return extended

    def _extend_backward(
        self,
        chain: Chain,
        intervals: Sequence[SilenceInterval],
        position: Dict[SilenceInterval, int],
        claimed: Set[SilenceInterval],
    ) -> Chain:
        index = position.get(chain.first)
        while index is not None and index > 0:
            neighbour = intervals[index - 1]
            if neighbour in claimed:
                break
            label = self._classifier.between(neighbour, chain.first)
            if not label.is_short:
                break
            LOGGER.debug("Extending chain start to %dms over %s", neighbour.midpoint_ms, label)
            chain = chain.prepended(neighbour, label)
            claimed.add(neighbour)
            index -= 1
        return chain

    def _extend_forward(
        self,
        chain: Chain,
        intervals: Sequence[SilenceInterval],
        position: Dict[SilenceInterval, int],
        claimed: Set[SilenceInterval],
    ) -> Chain:
        index = position.get(chain.last)
        while index is not None and index < len(intervals) - 1:
            neighbour = intervals[index + 1]
            if neighbour in claimed:
                break
            label = self._classifier.between(chain.last, neighbour)
            if not label.is_short:
                break
            LOGGER.debug("Extending chain end to %dms over %s", neighbour.midpoint_ms, label)
            chain = chain.appended(neighbour, label)
            claimed.add(neighbour)
            index += 1
        return chain


__all__ = ["ChainPostProcessor"]
