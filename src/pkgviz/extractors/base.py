"""Extractor protocol that all source extractors conform to."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pkgviz.model import SourceRecord


class Extractor(Protocol):
    """Protocol for per-file package/import extractors."""

    suffixes: tuple[str, ...]

    def can_handle(self, path: Path) -> bool:
        """Return True if this extractor understands the given source file."""
        ...

    def extract(self, path: Path) -> SourceRecord:
        """Read *path* and return its declared and referenced packages."""
        ...
