"""Exceptions raised by pkgviz."""

from __future__ import annotations

from pathlib import Path


class PkgvizError(Exception):
    """Base class for all pkgviz errors."""


class ReadError(PkgvizError, OSError):
    """A source file could not be read."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        message = f"Could not read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(PkgvizError, ValueError):
    """Invalid configuration (bad exclusion pattern, option value, config file)."""
