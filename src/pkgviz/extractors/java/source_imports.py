"""Extract the declared package and imported packages from Java source via javalang."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import javalang

from pkgviz.extractors import dedupe, package_of, read_source
from pkgviz.model import DEFAULT_PACKAGE, SourceRecord

logger = logging.getLogger(__name__)

# Regex patterns for fallback extraction when javalang fails on modern Java.
_PACKAGE_RE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_IMPORT_RE = re.compile(
    r"^\s*import\s+(?:static\s+)?([\w.]+(?:\.\*)?)\s*;", re.MULTILINE
)


class JavaSourceExtractor:
    """Produce a SourceRecord for each ``.java`` file."""

    suffixes = (".java",)

    def can_handle(self, path: Path) -> bool:
        return path.suffix in self.suffixes

    def extract(self, path: Path) -> SourceRecord:
        return parse_java_source(read_source(path), path)


def parse_java_source(text: str, path: Path | str = "<string>") -> SourceRecord:
    """Parse Java source *text* and return its package and package references."""
    try:
        tree = javalang.parse.parse(text)
    except (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError):
        logger.debug("javalang could not parse %s, using regex fallback", path)
        return _parse_java_source_fallback(text, path)
    except Exception as e:
        logger.debug("javalang failed on %s (%s), using regex fallback", path, e)
        return _parse_java_source_fallback(text, path)

    package = tree.package.name if tree.package else DEFAULT_PACKAGE

    references: list[str] = []
    for imp in tree.imports:
        pkg = package_of(imp.path, wildcard=imp.wildcard)
        if pkg:
            references.append(pkg)

    return SourceRecord(
        path=str(path),
        declared_package=package,
        referenced_packages=dedupe(references),
    )


def _parse_java_source_fallback(text: str, path: Path | str) -> SourceRecord:
    """Regex-based extraction for files javalang can't parse (Java 14+ features)."""
    m = _PACKAGE_RE.search(text)
    package = m.group(1) if m else DEFAULT_PACKAGE

    references: list[str] = []
    for m in _IMPORT_RE.finditer(text):
        pkg = package_of(m.group(1))
        if pkg:
            references.append(pkg)

    return SourceRecord(
        path=str(path),
        declared_package=package,
        referenced_packages=dedupe(references),
    )
