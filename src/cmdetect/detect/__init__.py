"""Commercial block detection engine."""

from .blocks import BlockFilter, CMBlock, DetectionResult, Segment, build_block, estimate_start_offset
from .chains import Chain, ChainBuilder, ChainState, build_chains
from .engine import CMDetector, detect
from .gaps import BREAK, GapClassifier, GapKind, GapLabel
from .intervals import MalformedInterval, SilenceInterval, normalize_intervals
from .postprocess import ChainPostProcessor

__all__ = [
    "BREAK",
    "BlockFilter",
    "CMBlock",
    "CMDetector",
    "Chain",
    "ChainBuilder",
    "ChainPostProcessor",
    "ChainState",
    "DetectionResult",
    "GapClassifier",
    "GapKind",
    "GapLabel",
    "MalformedInterval",
    "Segment",
    "SilenceInterval",
    "build_block",
    "build_chains",
    "detect",
    "estimate_start_offset",
    "normalize_intervals",
]
