"""Silence log helpers."""

from .parse import parse_silencedetect

__all__ = ["parse_silencedetect"]
