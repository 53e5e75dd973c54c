"""Data model for package dependency graphs."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_PACKAGE = "(default)"


@dataclass(frozen=True)
class SourceRecord:
    """The package declared by one source file and the packages it references."""

    path: str
    declared_package: str = DEFAULT_PACKAGE
    referenced_packages: tuple[str, ...] = ()

    @property
    def is_default_package(self) -> bool:
        return self.declared_package == DEFAULT_PACKAGE


@dataclass
class PackageNode:
    """A package (leaf) or a synthetic prefix group in the dependency graph."""

    id: str
    label: str
    file_count: int = 0
    is_group: bool = False
    child_count: int = 0
    depth: int = 0
    parent_id: str | None = None
    in_cycle: bool = False
    cycle_index: int = -1
    has_child_in_cycle: bool = False


@dataclass
class DependencyEdge:
    """Aggregated imports from one package to another."""

    source: str
    target: str
    weight: int = 0
    in_cycle: bool = False

    @property
    def id(self) -> str:
        return f"{self.source}->{self.target}"


@dataclass(frozen=True)
class CycleEdge:
    """Snapshot of an edge inside a cycle, kept as evidence."""

    source: str
    target: str
    weight: int


@dataclass(frozen=True)
class CycleInfo:
    """One cycle together with the graph edges that lie inside it."""

    index: int
    packages: tuple[str, ...]
    edges: tuple[CycleEdge, ...]

    @property
    def size(self) -> int:
        return len(self.packages)


@dataclass
class DependencyGraph:
    """Package-level graph; both mappings keep first-seen insertion order."""

    nodes: dict[str, PackageNode] = field(default_factory=dict)
    edges: dict[str, DependencyEdge] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


@dataclass
class AnalysisResult:
    """Complete output of one analysis run."""

    nodes: list[PackageNode] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    cycle_info: list[CycleInfo] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
