"""Analysis configuration: defaults, config-file loading, validation."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pkgviz.errors import ConfigError
from pkgviz.graph import compile_exclusions

logger = logging.getLogger(__name__)

LANGUAGES = ("java", "kotlin")
READ_ERROR_POLICIES = ("fail", "skip")


@dataclass
class HierarchyOptions:
    """Knobs for grouping packages under shared prefixes."""

    min_group_size: int = 2
    max_depth: int | None = None  # None means unbounded


@dataclass
class AnalysisConfig:
    """Everything the analysis pipeline needs besides the source directory."""

    exclude: list[str] = field(default_factory=list)
    hierarchy: bool = False
    hierarchy_options: HierarchyOptions = field(default_factory=HierarchyOptions)
    ignore: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=lambda: ["java"])
    on_read_error: str = "fail"
    jobs: int = 1

    def validate(self) -> None:
        """Raise ConfigError unless every option is usable."""
        if not isinstance(self.exclude, list):
            raise ConfigError(f"exclude must be a list of patterns: {self.exclude!r}")
        compile_exclusions(self.exclude)

        if not isinstance(self.hierarchy, bool):
            raise ConfigError(f"hierarchy must be true or false, got {self.hierarchy!r}")

        if not isinstance(self.ignore, list) or not all(
            isinstance(p, str) and p for p in self.ignore
        ):
            raise ConfigError(f"ignore must be a list of glob patterns: {self.ignore!r}")

        opts = self.hierarchy_options
        if not _is_int(opts.min_group_size) or opts.min_group_size < 1:
            raise ConfigError(
                f"min-group-size must be a positive integer, got {opts.min_group_size!r}"
            )
        if opts.max_depth is not None and (
            not _is_int(opts.max_depth) or opts.max_depth < 0
        ):
            raise ConfigError(
                f"max-depth must be a non-negative integer, got {opts.max_depth!r}"
            )

        if not self.languages:
            raise ConfigError("At least one language must be enabled")
        unknown = [lang for lang in self.languages if lang not in LANGUAGES]
        if unknown:
            raise ConfigError(
                f"Unknown language(s): {', '.join(map(str, unknown))} "
                f"(supported: {', '.join(LANGUAGES)})"
            )

        if self.on_read_error not in READ_ERROR_POLICIES:
            raise ConfigError(
                f"on-read-error must be one of {', '.join(READ_ERROR_POLICIES)}, "
                f"got {self.on_read_error!r}"
            )
        if not _is_int(self.jobs) or self.jobs < 1:
            raise ConfigError(f"jobs must be a positive integer, got {self.jobs!r}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_TOP_LEVEL_KEYS = {
    "exclude": "exclude",
    "hierarchy": "hierarchy",
    "ignore": "ignore",
    "languages": "languages",
    "on-read-error": "on_read_error",
    "jobs": "jobs",
}

_HIERARCHY_KEYS = {
    "min-group-size": "min_group_size",
    "max-depth": "max_depth",
}


def _normalise_key(key: str) -> str:
    return key.replace("_", "-")


def config_from_dict(data: dict[str, Any]) -> AnalysisConfig:
    """Build an AnalysisConfig from a ``[pkgviz]`` table.

    Hierarchy options may be given either as a ``[pkgviz.hierarchy-options]``
    sub-table or flat (``min-group-size = 3``).  Keys accept kebab-case or
    snake_case.
    """
    config = AnalysisConfig()
    for raw_key, value in data.items():
        key = _normalise_key(raw_key)
        if key == "hierarchy-options":
            if not isinstance(value, dict):
                raise ConfigError("hierarchy-options must be a table")
            for sub_key, sub_value in value.items():
                _set_hierarchy_option(config, _normalise_key(sub_key), sub_value)
        elif key in _HIERARCHY_KEYS:
            _set_hierarchy_option(config, key, value)
        elif key in _TOP_LEVEL_KEYS:
            setattr(config, _TOP_LEVEL_KEYS[key], value)
        else:
            raise ConfigError(f"Unknown configuration key: {raw_key!r}")
    return config


def _set_hierarchy_option(config: AnalysisConfig, key: str, value: Any) -> None:
    if key not in _HIERARCHY_KEYS:
        raise ConfigError(f"Unknown hierarchy option: {key!r}")
    setattr(config.hierarchy_options, _HIERARCHY_KEYS[key], value)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e


def _require_table(data: Any, path: Path, name: str) -> None:
    if not isinstance(data, dict):
        raise ConfigError(f"{name} in {path} must be a table, got {data!r}")


def load_config(project_dir: Path) -> AnalysisConfig:
    """Read pkgviz settings from .pkgviz.toml or pyproject.toml.

    ``.pkgviz.toml`` (table ``[pkgviz]``) wins over ``[tool.pkgviz]`` in
    ``pyproject.toml``.  Without either, defaults are returned.
    """
    pkgviz_toml = project_dir / ".pkgviz.toml"
    if pkgviz_toml.exists():
        data = _load_toml(pkgviz_toml).get("pkgviz", {})
        _require_table(data, pkgviz_toml, "[pkgviz]")
        logger.debug("Configuration from %s", pkgviz_toml)
        return config_from_dict(data)

    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        tool = _load_toml(pyproject).get("tool", {})
        _require_table(tool, pyproject, "[tool]")
        data = tool.get("pkgviz")
        if data is not None:
            _require_table(data, pyproject, "[tool.pkgviz]")
            logger.debug("Configuration from [tool.pkgviz] in %s", pyproject)
            return config_from_dict(data)

    return AnalysisConfig()
