"""Tests for the FFmpeg silencedetect runner."""

from __future__ import annotations

from pathlib import Path
from subprocess import CompletedProcess
from typing import Dict, List

import pytest

from cmdetect.utils import ffmpeg


def test_silencedetect_command_layout() -> None:
    cmd = ffmpeg.build_silencedetect_command(Path("show.ts"), noise_db=-50.0, min_silence=0.2)
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-i") + 1] == "show.ts"
    assert cmd[cmd.index("-af") + 1] == "silencedetect=noise=-50.0dB:d=0.2"
    assert cmd[-3:] == ["-f", "null", "-"]


def test_run_silencedetect_returns_stderr_lines(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    media = tmp_path / "show.ts"
    media.write_bytes(b"")
    recorded: Dict[str, List[str]] = {}

    def fake_run(cmd, check=False, text=True, capture_output=True):
        recorded["cmd"] = cmd
        stderr = "[silencedetect @ 0x0] silence_start: 1.0\n[silencedetect @ 0x0] silence_end: 1.5\n"
        return CompletedProcess(args=cmd, returncode=0, stdout="", stderr=stderr)

    monkeypatch.setattr(ffmpeg.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(ffmpeg.subprocess, "run", fake_run)

    lines = ffmpeg.run_silencedetect(media, noise_db=-40.0, min_silence=0.3)

    assert lines == [
        "[silencedetect @ 0x0] silence_start: 1.0",
        "[silencedetect @ 0x0] silence_end: 1.5",
    ]
    assert recorded["cmd"][recorded["cmd"].index("-i") + 1] == str(media)


def test_run_silencedetect_raises_on_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    media = tmp_path / "broken.ts"
    media.write_bytes(b"")

    def fake_run(cmd, check=False, text=True, capture_output=True):
        return CompletedProcess(args=cmd, returncode=1, stdout="", stderr="Invalid data found\n")

    monkeypatch.setattr(ffmpeg.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(ffmpeg.subprocess, "run", fake_run)

    with pytest.raises(ffmpeg.FFmpegError, match="Invalid data found"):
        ffmpeg.run_silencedetect(media, noise_db=-50.0, min_silence=0.2)


def test_missing_binary_is_reported(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    media = tmp_path / "show.ts"
    media.write_bytes(b"")
    monkeypatch.setattr(ffmpeg.shutil, "which", lambda _: None)
    with pytest.raises(FileNotFoundError, match="ffmpeg"):
        ffmpeg.run_silencedetect(media, noise_db=-50.0, min_silence=0.2)


def test_missing_media_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Media file not found"):
        ffmpeg.run_silencedetect(tmp_path / "absent.ts", noise_db=-50.0, min_silence=0.2)
