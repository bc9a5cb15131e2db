"""Command line interface for cm-detector."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from . import __version__
from .config import DetectorConfig, apply_overrides, load_config, validate_config
from .detect import CMDetector, DetectionResult
from .logging import configure_logging, get_logger
from .silence import parse_silencedetect
from .utils import ffmpeg
from .utils.timing import format_timestamp

LOGGER = get_logger("cli")

STDIN_NAME = "stdin"


class DetectionPipeline:
    """Parse silencedetect logs, run detection and render the JSON report."""

    def __init__(self, config: DetectorConfig) -> None:
        self._config = config
        self._detector = CMDetector(config)

    def detect_lines(self, log_lines: Sequence[str]) -> DetectionResult:
        pairs = parse_silencedetect(log_lines)
        result = self._detector.detect(pairs)
        LOGGER.info("Found %d silence segments", len(result.silence_segments))
        LOGGER.info("Detected %d CM blocks", len(result.cm_blocks))
        for index, block in enumerate(result.cm_blocks, 1):
            LOGGER.info(
                "  %d. %s - %s (%.1fs, %d segments)",
                index,
                format_timestamp(block.start_ms),
                format_timestamp(block.end_ms),
                block.duration_sec,
                len(block.segments),
            )
        return result

    def scan_media(self, media: Path) -> DetectionResult:
        cfg = self._config.silencedetect
        LOGGER.info("Running silencedetect on %s", media)
        log_lines = ffmpeg.run_silencedetect(
            media,
            noise_db=cfg.noise_db,
            min_silence=cfg.min_silence,
            ffmpeg_binary=cfg.ffmpeg_binary,
        )
        return self.detect_lines(log_lines)


def render_report(result: DetectionResult, input_file: str) -> str:
    return json.dumps(result.to_dict(input_file), indent=2, ensure_ascii=False)


def _read_log(source: Optional[Path]) -> List[str]:
    if source is None or str(source) == "-":
        LOGGER.info("Reading silence detection data from stdin...")
        return sys.stdin.read().splitlines()
    if not source.exists():
        raise FileNotFoundError(f"Log file not found: {source}")
    return source.read_text(encoding="utf-8", errors="replace").splitlines()


def _write_report(report: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(report + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report + "\n", encoding="utf-8")
    LOGGER.info("Wrote %s", output)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--tolerance-ms", type=int, dest="tolerance_ms")
    parser.add_argument("--min-block", type=float, dest="min_block", help="Minimum block length in seconds")
    parser.add_argument("--max-block", type=float, dest="max_block", help="Maximum block length in seconds")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cm-detector",
        description="Detect commercial blocks from FFmpeg silencedetect output",
    )
    parser.add_argument("--version", action="version", version=f"cm-detector {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect = subparsers.add_parser("detect", help="Detect blocks from a silencedetect log")
    detect.add_argument("log", type=Path, nargs="?", default=None, help="Log file, or '-' for stdin")
    detect.add_argument("--input-file", dest="input_file", default=None, help="Name reported as input_file")
    _add_common_arguments(detect)

    scan = subparsers.add_parser("scan", help="Run silencedetect on a media file, then detect blocks")
    scan.add_argument("media", type=Path, help="Media file to analyse")
    scan.add_argument("--noise-db", type=float, dest="noise_db")
    scan.add_argument("--min-silence", type=float, dest="min_silence")
    _add_common_arguments(scan)
    return parser


def _apply_cli_overrides(config: DetectorConfig, args: argparse.Namespace) -> DetectorConfig:
    overrides: Dict[str, Any] = {}
    if args.tolerance_ms is not None:
        overrides.setdefault("gaps", {})["tolerance_ms"] = int(args.tolerance_ms)
    if args.min_block is not None:
        overrides.setdefault("blocks", {})["min_duration_sec"] = float(args.min_block)
    if args.max_block is not None:
        overrides.setdefault("blocks", {})["max_duration_sec"] = float(args.max_block)
    if getattr(args, "noise_db", None) is not None:
        overrides.setdefault("silencedetect", {})["noise_db"] = float(args.noise_db)
    if getattr(args, "min_silence", None) is not None:
        overrides.setdefault("silencedetect", {})["min_silence"] = float(args.min_silence)
    if overrides:
        config = apply_overrides(config, overrides)
    return config


def _load(args: argparse.Namespace) -> DetectorConfig:
    config = DetectorConfig()
    if args.config is not None:
        if not args.config.exists():
            raise FileNotFoundError(f"Configuration file not found: {args.config}")
        config = load_config(args.config)
    config = _apply_cli_overrides(config, args)
    validate_config(config)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        pipeline = DetectionPipeline(_load(args))
        if args.command == "detect":
            result = pipeline.detect_lines(_read_log(args.log))
            if args.input_file:
                input_file = args.input_file
            elif args.log is None or str(args.log) == "-":
                input_file = STDIN_NAME
            else:
                input_file = str(args.log)
        else:
            result = pipeline.scan_media(args.media)
            input_file = str(args.media)
    except (FileNotFoundError, KeyError, TypeError, ValueError, ffmpeg.FFmpegError) as exc:
        LOGGER.error("%s", exc)
        return 1

    _write_report(render_report(result, input_file), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
