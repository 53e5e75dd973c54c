"""Find source files under a directory and read them into SourceRecords."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pkgviz.errors import ReadError
from pkgviz.extractors.base import Extractor
from pkgviz.model import SourceRecord

logger = logging.getLogger(__name__)

# Directories that hold build output or tooling state rather than sources.
_SKIP_DIRS = {
    ".git",
    ".gradle",
    "bin",
    "build",
    "node_modules",
    "out",
    "target",
}


def find_source_files(
    root: Path,
    suffixes: Iterable[str],
    ignore: Iterable[str] = (),
) -> list[Path]:
    """Return every file under *root* whose suffix is in *suffixes*, sorted.

    Build-output directories are never descended into.  *ignore* holds glob
    patterns matched against the POSIX path relative to *root*; a pattern
    matching a directory prunes the whole subtree.
    """
    suffixes = tuple(suffixes)
    ignore = list(ignore)

    def _ignored(rel: str) -> bool:
        return any(fnmatch.fnmatch(rel, pattern) for pattern in ignore)

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in _SKIP_DIRS and not _ignored((rel_dir / d).as_posix())
        )
        for filename in filenames:
            if not filename.endswith(suffixes):
                continue
            if _ignored((rel_dir / filename).as_posix()):
                continue
            found.append(current / filename)

    found.sort()
    logger.debug("Found %d source files under %s", len(found), root)
    return found


def _extractor_for(path: Path, extractors: Sequence[Extractor]) -> Extractor | None:
    for ext in extractors:
        if ext.can_handle(path):
            return ext
    return None


def read_sources(
    paths: Sequence[Path],
    extractors: Sequence[Extractor],
    *,
    on_read_error: str = "fail",
    jobs: int = 1,
) -> list[SourceRecord]:
    """Extract one SourceRecord per file in *paths*, keeping input order.

    With ``on_read_error="fail"`` the first unreadable file aborts the run
    by re-raising its ReadError; with ``"skip"`` the file is left out and a
    warning is logged.  ``jobs > 1`` reads files on a thread pool.
    """

    def _extract(path: Path) -> SourceRecord | None:
        ext = _extractor_for(path, extractors)
        if ext is None:
            logger.debug("No extractor for %s", path)
            return None
        try:
            return ext.extract(path)
        except ReadError as e:
            if on_read_error == "skip":
                logger.warning("Skipping unreadable file: %s", e)
                return None
            raise

    if jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(_extract, paths))
    else:
        results = [_extract(p) for p in paths]

    records = [r for r in results if r is not None]
    logger.debug("Parsed %d of %d files", len(records), len(paths))
    return records
