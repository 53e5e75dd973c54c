"""Post-extraction graph analysis (cycle detection, cycle marking)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pkgviz.model import CycleEdge, CycleInfo, DependencyGraph

logger = logging.getLogger(__name__)


def strongly_connected_components(
    node_ids: Sequence[str],
    edges: Iterable[tuple[str, str]],
) -> list[list[str]]:
    """Return every strongly-connected component using Tarjan's algorithm.

    Node ids are mapped to integer positions and the depth-first search runs
    on an explicit work stack, so long dependency chains cannot exhaust the
    interpreter's recursion limit.  Components are emitted in the order their
    roots close (reverse topological order of the condensation); within a
    component, nodes appear in pop order.  Edges naming unknown nodes are
    ignored.
    """
    position: dict[str, int] = {}
    for i, node_id in enumerate(node_ids):
        if node_id in position:
            raise ValueError(f"Duplicate node id: {node_id!r}")
        position[node_id] = i

    n = len(node_ids)
    adjacency: list[list[int]] = [[] for _ in range(n)]
    for source, target in edges:
        s = position.get(source)
        t = position.get(target)
        if s is None or t is None:
            continue
        adjacency[s].append(t)

    index = [-1] * n
    lowlink = [0] * n
    on_stack = [False] * n
    stack: list[int] = []
    sccs: list[list[str]] = []
    counter = 0

    for root in range(n):
        if index[root] != -1:
            continue

        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        # Each frame is (node, position of the next successor to examine).
        work: list[tuple[int, int]] = [(root, 0)]

        while work:
            v, pos = work[-1]
            successors = adjacency[v]
            if pos < len(successors):
                work[-1] = (v, pos + 1)
                w = successors[pos]
                if index[w] == -1:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    work.append((w, 0))
                elif on_stack[w]:
                    lowlink[v] = min(lowlink[v], index[w])
                continue

            work.pop()
            if work:
                caller = work[-1][0]
                lowlink[caller] = min(lowlink[caller], lowlink[v])

            if lowlink[v] == index[v]:
                scc: list[str] = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    scc.append(node_ids[w])
                    if w == v:
                        break
                sccs.append(scc)

    return sccs


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Return strongly-connected components of size ≥ 2 (dependency cycles)."""
    sccs = strongly_connected_components(
        list(graph.nodes),
        ((e.source, e.target) for e in graph.edges.values()),
    )
    return [scc for scc in sccs if len(scc) > 1]


def build_cycle_info(
    cycles: list[list[str]], graph: DependencyGraph
) -> list[CycleInfo]:
    """Attach to each cycle the edges whose endpoints both lie inside it."""
    info: list[CycleInfo] = []
    for i, cycle in enumerate(cycles):
        members = set(cycle)
        edges = tuple(
            CycleEdge(source=e.source, target=e.target, weight=e.weight)
            for e in graph.edges.values()
            if e.source in members and e.target in members
        )
        info.append(CycleInfo(index=i, packages=tuple(cycle), edges=edges))
    return info


def detect_cycles(
    graph: DependencyGraph,
) -> tuple[list[list[str]], list[CycleInfo]]:
    """Find all cycles in *graph* along with their evidence edges."""
    cycles = find_cycles(graph)
    cycle_info = build_cycle_info(cycles, graph)
    logger.debug("Cycles detected: %d", len(cycles))
    return cycles, cycle_info


def mark_cycle_elements(graph: DependencyGraph, cycles: list[list[str]]) -> None:
    """Flag nodes and edges of *graph* that belong to a cycle.

    An edge is in a cycle only when both endpoints are in the same cycle.
    """
    cycle_of: dict[str, int] = {}
    for i, cycle in enumerate(cycles):
        for node_id in cycle:
            cycle_of[node_id] = i

    for node_id, node in graph.nodes.items():
        node.cycle_index = cycle_of.get(node_id, -1)
        node.in_cycle = node.cycle_index != -1

    for edge in graph.edges.values():
        source_cycle = cycle_of.get(edge.source)
        edge.in_cycle = source_cycle is not None and source_cycle == cycle_of.get(
            edge.target
        )
