"""Build the package-level dependency graph from per-file source records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from pkgviz.errors import ConfigError
from pkgviz.model import DependencyEdge, DependencyGraph, PackageNode, SourceRecord

logger = logging.getLogger(__name__)


class ExclusionFilter:
    """Compiled exclusion patterns.

    A pattern containing ``*`` is a glob matched against the whole package
    name (``.`` is literal, ``*`` matches anything); any other pattern is a
    plain string prefix.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: list[str] = []
        self._prefixes: list[str] = []
        self._globs: list[re.Pattern[str]] = []
        for pattern in patterns:
            if not isinstance(pattern, str) or not pattern:
                raise ConfigError(f"Invalid exclude pattern: {pattern!r}")
            if "*" in pattern:
                self._globs.append(_compile_glob(pattern))
            else:
                self._prefixes.append(pattern)
            self.patterns.append(pattern)

    def matches(self, package: str) -> bool:
        if any(package.startswith(prefix) for prefix in self._prefixes):
            return True
        return any(regex.match(package) for regex in self._globs)

    def __bool__(self) -> bool:
        return bool(self.patterns)


def _compile_glob(pattern: str) -> re.Pattern[str]:
    translated = pattern.replace(".", r"\.").replace("*", ".*")
    try:
        return re.compile(f"^{translated}$")
    except re.error as e:
        raise ConfigError(f"Invalid exclude pattern {pattern!r}: {e}") from e


def compile_exclusions(patterns: Iterable[str] | ExclusionFilter) -> ExclusionFilter:
    """Validate and compile *patterns*; raises ConfigError on a bad pattern."""
    if isinstance(patterns, ExclusionFilter):
        return patterns
    if isinstance(patterns, str):
        raise ConfigError("exclude must be a list of patterns, not a string")
    return ExclusionFilter(patterns)


def short_name(package: str) -> str:
    """Display name: the last two segments of a long package name."""
    parts = package.split(".")
    return ".".join(parts[-2:]) if len(parts) > 2 else package


def _new_node(package: str) -> PackageNode:
    return PackageNode(
        id=package,
        label=short_name(package),
        depth=len(package.split(".")),
    )


def build_dependency_graph(
    records: Iterable[SourceRecord],
    exclude: Iterable[str] | ExclusionFilter = (),
) -> DependencyGraph:
    """Aggregate *records* into package nodes and weighted import edges.

    Only internal dependencies are kept: a referenced package becomes an
    edge target only when some record declares it.  Self-references and
    excluded packages are dropped.
    """
    records = list(records)
    exclusions = compile_exclusions(exclude)

    project_packages = {r.declared_package for r in records if not r.is_default_package}

    graph = DependencyGraph()
    for record in records:
        source = record.declared_package
        if record.is_default_package or exclusions.matches(source):
            continue

        node = graph.nodes.get(source)
        if node is None:
            node = graph.nodes[source] = _new_node(source)
        node.file_count += 1

        for target in record.referenced_packages:
            if target == source or target not in project_packages:
                continue
            if exclusions.matches(target):
                continue
            if target not in graph.nodes:
                graph.nodes[target] = _new_node(target)

            edge_id = f"{source}->{target}"
            edge = graph.edges.get(edge_id)
            if edge is None:
                edge = graph.edges[edge_id] = DependencyEdge(source=source, target=target)
            edge.weight += 1

    logger.debug(
        "Graph: %d packages, %d dependencies (%d project packages before filtering)",
        len(graph.nodes),
        len(graph.edges),
        len(project_packages),
    )
    return graph
