"""Configuration models and loader utilities."""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml


@dataclass(slots=True)
class GapConfig:
    tolerance_ms: int = 500
    standard_units_sec: List[int] = field(default_factory=lambda: [15, 30, 45, 60, 75])
    short_units_sec: List[int] = field(default_factory=lambda: [5, 10])
    break_threshold_sec: float = 90.0


@dataclass(slots=True)
class BlockConfig:
    min_duration_sec: float = 60.0
    max_duration_sec: float = 360.0
    min_standard_units: int = 2


@dataclass(slots=True)
class SilenceDetectConfig:
    noise_db: float = -50.0
    min_silence: float = 0.2
    ffmpeg_binary: str = "ffmpeg"


@dataclass(slots=True)
class DetectorConfig:
    gaps: GapConfig = field(default_factory=GapConfig)
    blocks: BlockConfig = field(default_factory=BlockConfig)
    silencedetect: SilenceDetectConfig = field(default_factory=SilenceDetectConfig)


def load_config(path: pathlib.Path) -> DetectorConfig:
    """Load configuration from a YAML file."""
    with path.open("r", encoding="utf-8") as handle:
        data: Dict[str, Any] = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise TypeError(f"Configuration file {path} must contain a mapping")
    return apply_overrides(DetectorConfig(), data)


def apply_overrides(config: DetectorConfig, overrides: Dict[str, Any]) -> DetectorConfig:
    """Apply dictionary overrides recursively to a configuration object."""

    def merge(target: Any, src: Dict[str, Any]) -> Any:
        if dataclasses.is_dataclass(target):
            for key, value in src.items():
                if not hasattr(target, key):
                    raise KeyError(f"Unknown configuration key: {key}")
                attr = getattr(target, key)
                if dataclasses.is_dataclass(attr):
                    if not isinstance(value, dict):
                        raise TypeError(f"Configuration section '{key}' must be a mapping, got {value!r}")
                    merge(attr, value)
                elif isinstance(attr, list) and value is not None:
                    setattr(target, key, list(value))
                else:
                    setattr(target, key, value)
            return target
        raise TypeError("Target must be a dataclass instance")

    merge(config, overrides)
    return config


def _unit_windows_disjoint(units_ms: List[int], tolerance_ms: int) -> bool:
    ordered = sorted(units_ms)
    return all(later - earlier > 2 * tolerance_ms for earlier, later in zip(ordered, ordered[1:]))


def validate_config(config: DetectorConfig) -> None:
    """Validate logical invariants of the detector configuration."""
    gaps = config.gaps
    if gaps.tolerance_ms < 0:
        raise ValueError("Gap tolerance must be non-negative")
    if not gaps.standard_units_sec:
        raise ValueError("At least one standard unit is required")
    units = list(gaps.standard_units_sec) + list(gaps.short_units_sec)
    if any(unit <= 0 for unit in units):
        raise ValueError("Unit lengths must be positive")
    if not _unit_windows_disjoint([int(round(unit * 1000)) for unit in units], gaps.tolerance_ms):
        raise ValueError("Unit tolerance windows overlap; reduce the tolerance or spread the units")
    if gaps.break_threshold_sec <= 0:
        raise ValueError("Break threshold must be positive")

    blocks = config.blocks
    if blocks.min_duration_sec < 0:
        raise ValueError("Minimum block duration must be non-negative")
    if blocks.min_duration_sec > blocks.max_duration_sec:
        raise ValueError("Minimum block duration cannot exceed maximum block duration")
    if blocks.min_standard_units < 1:
        raise ValueError("At least one standard unit must be required per block")

    if config.silencedetect.min_silence <= 0:
        raise ValueError("Minimum silence duration must be positive")


__all__ = [
    "GapConfig",
    "BlockConfig",
    "SilenceDetectConfig",
    "DetectorConfig",
    "load_config",
    "apply_overrides",
    "validate_config",
]
