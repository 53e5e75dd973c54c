"""Orchestrator: scan → extract → build graph → detect cycles → group → render."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pkgviz.analysis import detect_cycles, mark_cycle_elements
from pkgviz.config import AnalysisConfig
from pkgviz.detect import detect_extractors, source_suffixes
from pkgviz.graph import build_dependency_graph
from pkgviz.hierarchy import (
    aggregate_file_counts,
    build_hierarchy,
    propagate_cycle_status,
)
from pkgviz.model import AnalysisResult, SourceRecord
from pkgviz.scanner import find_source_files, read_sources

logger = logging.getLogger(__name__)


def analyze_records(
    records: Iterable[SourceRecord], config: AnalysisConfig | None = None
) -> AnalysisResult:
    """Run the analysis stages on already-extracted source records."""
    config = config or AnalysisConfig()

    graph = build_dependency_graph(records, config.exclude)
    if graph.is_empty:
        logger.debug("No internal packages left after filtering")
        return AnalysisResult()

    cycles, cycle_info = detect_cycles(graph)
    mark_cycle_elements(graph, cycles)

    nodes = list(graph.nodes.values())
    if config.hierarchy:
        nodes = build_hierarchy(nodes, config.hierarchy_options)
        aggregate_file_counts(nodes)
        propagate_cycle_status(nodes)

    return AnalysisResult(
        nodes=nodes,
        edges=list(graph.edges.values()),
        cycles=cycles,
        cycle_info=cycle_info,
    )


def analyze(source_dir: Path, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Analyze every source file under *source_dir*.

    *config* is validated first, so a bad option raises ConfigError before
    any file is read.  An unreadable file raises ReadError unless
    ``config.on_read_error`` is ``"skip"``.  Zero packages is not an error:
    the returned result is simply empty.
    """
    config = config or AnalysisConfig()
    config.validate()

    extractors = detect_extractors(config.languages)
    files = find_source_files(source_dir, source_suffixes(extractors), config.ignore)
    logger.info("Found %d source files in %s", len(files), source_dir)
    if not files:
        return AnalysisResult()

    records = read_sources(
        files,
        extractors,
        on_read_error=config.on_read_error,
        jobs=config.jobs,
    )
    logger.info("Parsed %d files", len(records))

    result = analyze_records(records, config)
    logger.info(
        "Graph: %d nodes, %d dependencies, %d cycles",
        len(result.nodes),
        len(result.edges),
        len(result.cycles),
    )
    return result


def run(
    source_dir: Path,
    *,
    config: AnalysisConfig | None = None,
    output: Path | None = None,
    serve: bool = False,
    host: str = "127.0.0.1",
    port: int = 3000,
    open_browser: bool = False,
) -> AnalysisResult:
    """Run the full pkgviz pipeline and write, print, or serve the result."""
    from pkgviz.renderer.json import dumps, render_json

    source_dir = source_dir.resolve()
    result = analyze(source_dir, config)
    if result.is_empty:
        return result

    if output is not None:
        render_json(result, output)
        logger.info("Generated %s", output)
    elif not serve:
        print(dumps(result, indent=2))

    if serve:
        from pkgviz.server import serve as serve_result

        serve_result(result, host=host, port=port, open_browser=open_browser)

    return result
