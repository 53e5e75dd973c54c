"""Source extractors: shared helpers."""

from __future__ import annotations

from pathlib import Path

from pkgviz.errors import ReadError


def read_source(path: Path) -> str:
    """Read a source file as text, raising ReadError on failure."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e


def package_of(import_path: str, *, wildcard: bool = False) -> str | None:
    """Strip the terminal simple name (or wildcard) from an import path.

    Returns None unless the remaining package path has at least two
    segments, so single-segment imports never count as package references.
    """
    if wildcard:
        package = import_path
    elif import_path.endswith(".*"):
        package = import_path[:-2]
    else:
        package = import_path.rpartition(".")[0]
    if "." not in package:
        return None
    return package


def dedupe(packages) -> tuple[str, ...]:
    """Drop duplicate references, keeping first-seen order."""
    return tuple(dict.fromkeys(packages))
