"""Extract the declared package and imported packages from Kotlin source."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pkgviz.extractors import dedupe, package_of, read_source
from pkgviz.model import DEFAULT_PACKAGE, SourceRecord

logger = logging.getLogger(__name__)

# Kotlin statements need no semicolon, but several may share a line when
# separated by one. An import alias (import a.b.C as D) is not captured.
_PACKAGE_RE = re.compile(r"^\s*package\s+([\w.]+)", re.MULTILINE)
_IMPORT_RE = re.compile(r"(?:^|;)\s*import\s+([\w.]*\w(?:\.\*)?)", re.MULTILINE)


class KotlinSourceExtractor:
    """Produce a SourceRecord for each ``.kt`` file."""

    suffixes = (".kt",)

    def can_handle(self, path: Path) -> bool:
        return path.suffix in self.suffixes

    def extract(self, path: Path) -> SourceRecord:
        return parse_kotlin_source(read_source(path), path)


def parse_kotlin_source(text: str, path: Path | str = "<string>") -> SourceRecord:
    """Parse Kotlin source *text* and return its package and package references."""
    m = _PACKAGE_RE.search(text)
    package = m.group(1) if m else DEFAULT_PACKAGE

    references: list[str] = []
    for m in _IMPORT_RE.finditer(text):
        pkg = package_of(m.group(1))
        if pkg:
            references.append(pkg)

    logger.debug("%s: package %s, %d references", path, package, len(references))
    return SourceRecord(
        path=str(path),
        declared_package=package,
        referenced_packages=dedupe(references),
    )
