"""Serialize an AnalysisResult into the JSON structure consumed by viewers."""

from __future__ import annotations

import json
from pathlib import Path

from pkgviz.model import AnalysisResult, CycleInfo, DependencyEdge, PackageNode


def _node_to_dict(node: PackageNode) -> dict:
    d: dict = {
        "id": node.id,
        "label": node.label,
        "fullName": node.id,
        "fileCount": node.file_count,
        "isGroup": node.is_group,
        "childCount": node.child_count,
        "depth": node.depth,
        "parentId": node.parent_id,
        "inCycle": node.in_cycle,
        "cycleIndex": node.cycle_index,
    }
    if node.is_group:
        d["hasChildInCycle"] = node.has_child_in_cycle
    return d


def _edge_to_dict(edge: DependencyEdge) -> dict:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "weight": edge.weight,
        "inCycle": edge.in_cycle,
    }


def _cycle_info_to_dict(info: CycleInfo) -> dict:
    return {
        "index": info.index,
        "packages": list(info.packages),
        "edges": [
            {"from": e.source, "to": e.target, "weight": e.weight} for e in info.edges
        ],
        "size": info.size,
    }


def result_to_dict(result: AnalysisResult) -> dict:
    """Return ``{nodes, edges, cycles, cycleInfo}`` for *result*."""
    return {
        "nodes": [_node_to_dict(n) for n in result.nodes],
        "edges": [_edge_to_dict(e) for e in result.edges],
        "cycles": [list(c) for c in result.cycles],
        "cycleInfo": [_cycle_info_to_dict(i) for i in result.cycle_info],
    }


def stats_to_dict(result: AnalysisResult) -> dict:
    """Return summary counts and the sorted list of (non-group) packages."""
    packages = sorted(n.id for n in result.nodes if not n.is_group)
    return {
        "nodeCount": len(result.nodes),
        "edgeCount": len(result.edges),
        "packages": packages,
    }


def dumps(result: AnalysisResult, *, indent: int | None = None) -> str:
    return json.dumps(result_to_dict(result), indent=indent)


def render_json(result: AnalysisResult, output_path: Path, *, indent: int | None = 2) -> None:
    """Write *result* as JSON to *output_path*."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps(result, indent=indent), encoding="utf-8")
