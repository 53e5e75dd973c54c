"""Command-line interface for pkgviz."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pkgviz.config import LANGUAGES, AnalysisConfig, load_config
from pkgviz.errors import ConfigError, ReadError
from pkgviz.pipeline import run

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgviz",
        description="Package dependency graph and circular dependency detector for Java/Kotlin sources.",
    )
    parser.add_argument(
        "directory",
        type=Path,
        help="Path to the project or source directory to analyze",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the graph JSON to this file (default: stdout)",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        nargs="+",
        default=None,
        metavar="PATTERN",
        help='Package patterns to exclude (e.g. "java.*" "javax.*")',
    )
    parser.add_argument(
        "--hierarchy",
        action="store_true",
        default=None,
        help="Group packages under shared name prefixes",
    )
    parser.add_argument(
        "--min-group-size",
        type=int,
        default=None,
        help="Minimum direct children for a prefix group (default: 2)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Deepest prefix level that may form a group (default: unbounded)",
    )
    parser.add_argument(
        "--ignore",
        nargs="+",
        default=None,
        metavar="GLOB",
        help="Path globs (relative to DIRECTORY) to leave out of the scan",
    )
    parser.add_argument(
        "--language",
        dest="languages",
        action="append",
        choices=LANGUAGES,
        default=None,
        help="Source language to scan; repeat for several (default: java)",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Warn about and skip unreadable files instead of failing",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of threads used to read source files (default: 1)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the graph over HTTP at /api/graph and /api/stats",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=3000,
        help="Server port (default: 3000)",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        dest="open_browser",
        help="Open the served graph in a browser",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )
    return parser


def _apply_overrides(config: AnalysisConfig, args: argparse.Namespace) -> AnalysisConfig:
    """Let command-line flags win over configuration-file values."""
    if args.exclude is not None:
        config.exclude = list(args.exclude)
    if args.hierarchy:
        config.hierarchy = True
    if args.min_group_size is not None:
        config.hierarchy_options.min_group_size = args.min_group_size
    if args.max_depth is not None:
        config.hierarchy_options.max_depth = args.max_depth
    if args.ignore is not None:
        config.ignore = list(args.ignore)
    if args.languages is not None:
        config.languages = list(dict.fromkeys(args.languages))
    if args.skip_unreadable:
        config.on_read_error = "skip"
    if args.jobs is not None:
        config.jobs = args.jobs
    return config


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("pkgviz").setLevel(logging.DEBUG)

    directory = args.directory.resolve()
    if not directory.exists():
        logger.error("Error: Directory not found: %s", directory)
        sys.exit(1)
    if not directory.is_dir():
        logger.error("Error: Not a directory: %s", directory)
        sys.exit(1)

    try:
        config = _apply_overrides(load_config(directory), args)
        result = run(
            directory,
            config=config,
            output=args.output,
            serve=args.serve,
            host=args.host,
            port=args.port,
            open_browser=args.open_browser,
        )
    except (ConfigError, ReadError) as e:
        logger.error("Error: %s", e)
        sys.exit(1)

    if result.is_empty:
        logger.error(
            "No packages found to visualize. Make sure the directory contains "
            "source files with package declarations."
        )
        sys.exit(1)
