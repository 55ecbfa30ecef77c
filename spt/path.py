"""Utilities for walking shortest path trees stored as predecessor arrays."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .exceptions import AlgorithmError

Vertex = int


def reconstruct_path(predecessors: Sequence[Vertex], target: Vertex) -> List[Vertex]:
    """Return the tree path ending at ``target``.

    Roots are the vertices that are their own predecessor. The walk follows
    predecessors from ``target`` back to such a vertex.

    Args:
        predecessors: Parent of every vertex.
        target: Vertex the path ends at.

    Returns:
        Vertices from the root to ``target`` (inclusive).

    Raises:
        ValueError: If ``target`` is out of range.
        AlgorithmError: If the walk does not reach a root within
            ``len(predecessors)`` steps, i.e. the array contains a cycle.
    """
    n = len(predecessors)
    if not 0 <= target < n:
        raise ValueError(f"target {target} out of range [0, {n}).")

    chain: List[Vertex] = [target]
    cur = target
    for _ in range(n):
        parent = predecessors[cur]
        if parent == cur:
            chain.reverse()
            return chain
        chain.append(parent)
        cur = parent
    raise AlgorithmError(f"predecessor cycle reached while walking back from {target}")


def tree_edges(predecessors: Sequence[Vertex]) -> List[Tuple[Vertex, Vertex]]:
    """Return the ``(parent, child)`` edges of the tree; roots contribute none."""
    return [(p, v) for v, p in enumerate(predecessors) if p != v]


def tree_depths(predecessors: Sequence[Vertex]) -> List[int]:
    """Return the number of tree edges between each vertex and its root.

    Raises:
        AlgorithmError: If the predecessor array contains a cycle.
    """
    n = len(predecessors)
    depth: Dict[Vertex, int] = {}
    for v in range(n):
        stack: List[Vertex] = []
        cur = v
        while cur not in depth:
            if predecessors[cur] == cur:
                depth[cur] = 0
                break
            stack.append(cur)
            if len(stack) > n:
                raise AlgorithmError(f"predecessor cycle reached while walking back from {v}")
            cur = predecessors[cur]
        d = depth[cur]
        while stack:
            d += 1
            depth[stack.pop()] = d
    return [depth[v] for v in range(n)]


__all__ = ["reconstruct_path", "tree_edges", "tree_depths"]
