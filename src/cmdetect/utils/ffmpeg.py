"""FFmpeg helper utilities."""

from __future__ import annotations

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List

from ..logging import get_logger

LOGGER = get_logger("utils.ffmpeg")

_STDERR_TAIL_LINES = 20


class FFmpegError(RuntimeError):
    """Raised when an FFmpeg invocation fails."""


def require_binary(name: str) -> str:
    """Return the absolute path to a binary or raise an informative error."""
    resolved = shutil.which(name)
    if resolved is None:
        raise FileNotFoundError(
            f"Required binary '{name}' was not found on PATH. Please install it or adjust PATH."
        )
    return resolved


def run_command(command: Iterable[str], check: bool = True) -> subprocess.CompletedProcess[str]:
    """Run a subprocess command returning its completion object."""
    command_list: List[str] = list(command)
    LOGGER.debug("Running command: %s", shlex.join(command_list))
    result = subprocess.run(
        command_list,
        check=False,
        text=True,
        capture_output=True,
    )
    if check and result.returncode != 0:
        tail = "\n".join((result.stderr or "").splitlines()[-_STDERR_TAIL_LINES:])
        raise FFmpegError(f"Command exited with status {result.returncode}: {command_list[0]}\n{tail}")
    return result


def build_silencedetect_command(
    media: Path,
    noise_db: float,
    min_silence: float,
    ffmpeg_binary: str = "ffmpeg",
) -> List[str]:
    return [
        ffmpeg_binary,
        "-hide_banner",
        "-nostats",
        "-i",
        str(media),
        "-af",
        f"silencedetect=noise={noise_db}dB:d={min_silence}",
        "-vn",
        "-f",
        "null",
        "-",
    ]


def run_silencedetect(
    media: Path,
    noise_db: float,
    min_silence: float,
    ffmpeg_binary: str = "ffmpeg",
) -> List[str]:
    """Run the ``silencedetect`` filter over ``media`` and return its log lines.

    FFmpeg reports detections on stderr; the returned list is that stream
    split into lines.
    """
    if not media.exists():
        raise FileNotFoundError(f"Media file not found: {media}")
    require_binary(ffmpeg_binary)
    command = build_silencedetect_command(media, noise_db, min_silence, ffmpeg_binary)
    result = run_command(command, check=True)
    return (result.stderr or "").splitlines()


__all__ = [
    "FFmpegError",
    "require_binary",
    "run_command",
    "build_silencedetect_command",
    "run_silencedetect",
]
