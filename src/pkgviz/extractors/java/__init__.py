"""Java source extractor."""

from pkgviz.extractors.java.source_imports import JavaSourceExtractor, parse_java_source

__all__ = ["JavaSourceExtractor", "parse_java_source"]
