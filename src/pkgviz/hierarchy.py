"""Group leaf packages under synthetic prefix nodes for a collapsible view."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Container, Sequence

from pkgviz.config import HierarchyOptions
from pkgviz.model import PackageNode

logger = logging.getLogger(__name__)


def _nearest_prefix(node_id: str, candidates: Container[str]) -> str | None:
    """Return the longest strict dot-prefix of *node_id* found in *candidates*."""
    parts = node_id.split(".")
    for i in range(len(parts) - 1, 0, -1):
        prefix = ".".join(parts[:i])
        if prefix in candidates:
            return prefix
    return None


def build_hierarchy(
    nodes: Sequence[PackageNode],
    options: HierarchyOptions | None = None,
) -> list[PackageNode]:
    """Return copies of *nodes* with parent links, followed by the group nodes.

    Every strict prefix of a leaf name that is not itself a leaf is a
    candidate group.  Each leaf and each candidate counts toward its nearest
    enclosing candidate only.  Candidates with at least
    ``options.min_group_size`` direct children and a depth within
    ``options.max_depth`` become groups; everything else is dropped and its
    children attach to the nearest surviving ancestor, or to nothing.
    """
    options = options or HierarchyOptions()
    leaf_ids = {n.id for n in nodes}

    candidates: dict[str, PackageNode] = {}
    for node in nodes:
        parts = node.id.split(".")
        for i in range(1, len(parts)):
            prefix = ".".join(parts[:i])
            if prefix in leaf_ids or prefix in candidates:
                continue
            candidates[prefix] = PackageNode(
                id=prefix,
                label=parts[i - 1],
                is_group=True,
                depth=i,
            )

    for node_id in [n.id for n in nodes] + list(candidates):
        parent = _nearest_prefix(node_id, candidates)
        if parent is not None:
            candidates[parent].child_count += 1

    groups = {
        prefix: group
        for prefix, group in candidates.items()
        if group.child_count >= options.min_group_size
        and (options.max_depth is None or group.depth <= options.max_depth)
    }

    result: list[PackageNode] = [
        dataclasses.replace(
            node,
            parent_id=_nearest_prefix(node.id, groups),
            depth=len(node.id.split(".")),
        )
        for node in nodes
    ]
    for prefix, group in groups.items():
        group.parent_id = _nearest_prefix(prefix, groups)
        result.append(group)

    logger.debug(
        "Hierarchy: %d leaves, %d candidate groups, %d groups kept",
        len(nodes),
        len(candidates),
        len(groups),
    )
    return result


def aggregate_file_counts(nodes: Sequence[PackageNode]) -> None:
    """Add each node's file count into its parent, deepest nodes first.

    Afterwards a group's ``file_count`` is the total over its whole subtree.
    """
    by_id = {n.id: n for n in nodes}
    for node in sorted(nodes, key=lambda n: n.depth, reverse=True):
        parent = by_id.get(node.parent_id) if node.parent_id else None
        if parent is not None:
            parent.file_count += node.file_count


def propagate_cycle_status(nodes: Sequence[PackageNode]) -> None:
    """Flag every ancestor group of an in-cycle leaf with ``has_child_in_cycle``."""
    by_id = {n.id: n for n in nodes}
    for node in nodes:
        if not node.in_cycle:
            continue
        current = node.parent_id
        while current is not None and current in by_id:
            ancestor = by_id[current]
            if ancestor.has_child_in_cycle:
                # Everything above was flagged by an earlier descendant.
                break
            ancestor.has_child_in_cycle = True
            current = ancestor.parent_id
