"""Return the source extractors for the configured languages."""

from __future__ import annotations

from pkgviz.extractors.base import Extractor


def detect_extractors(languages: list[str]) -> list[Extractor]:
    """Return an ordered list of extractors, one per enabled language."""
    extractors: list[Extractor] = []

    if "java" in languages:
        from pkgviz.extractors.java import JavaSourceExtractor

        extractors.append(JavaSourceExtractor())

    if "kotlin" in languages:
        from pkgviz.extractors.kotlin import KotlinSourceExtractor

        extractors.append(KotlinSourceExtractor())

    return extractors


def source_suffixes(extractors: list[Extractor]) -> tuple[str, ...]:
    """File suffixes handled by *extractors*, in order and without duplicates."""
    return tuple(dict.fromkeys(s for ext in extractors for s in ext.suffixes))
