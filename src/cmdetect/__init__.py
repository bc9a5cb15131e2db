"""Commercial block detection from silence intervals."""

__version__ = "0.1.0"
