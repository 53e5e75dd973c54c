"""Kotlin source extractor."""

from pkgviz.extractors.kotlin.source_imports import (
    KotlinSourceExtractor,
    parse_kotlin_source,
)

__all__ = ["KotlinSourceExtractor", "parse_kotlin_source"]
