"""Reduction of multi-root problems to a single hyper-root and back."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import EmptyRootSetError
from .graph import Graph, Vertex


def normalize_roots(roots: Iterable[Vertex]) -> List[Vertex]:
    """Return ``roots`` without duplicates, keeping first-seen order."""
    return list(dict.fromkeys(int(r) for r in roots))


def reduce(graph: Graph, roots: Iterable[Vertex]) -> Tuple[Vertex, bool]:
    """Pick the single root a solver should start from.

    A lone distinct root is used as is. Several roots are joined under a new
    hyper-root added to ``graph``; the caller must hand the returned pair to
    :func:`restore` when the solve ends.

    Args:
        graph: Graph to solve on; augmented in place when needed.
        roots: Non-empty collection of valid vertex ids.

    Returns:
        ``(effective_root, needs_cleanup)``.

    Raises:
        EmptyRootSetError: If ``roots`` is empty.
        VertexOutOfRangeError: If a root is not a vertex of ``graph``.
    """
    unique = normalize_roots(roots)
    if not unique:
        raise EmptyRootSetError("at least one root is required")
    if len(unique) == 1:
        return graph.check_vertex(unique[0]), False
    return graph.add_hyper_root(unique), True


def restore(
    graph: Graph,
    labels: npt.NDArray[np.float32],
    predecessors: List[Vertex],
    effective_root: Vertex,
    needs_cleanup: bool,
) -> Tuple[npt.NDArray[np.float32], List[Vertex]]:
    """Undo :func:`reduce` on the graph and the solver output.

    With ``needs_cleanup`` every vertex whose predecessor is the hyper-root
    becomes its own predecessor, the hyper-root entry is dropped from both
    arrays and the synthetic vertex is removed from ``graph``.

    Returns:
        The ``(labels, predecessors)`` covering the original vertices only.
    """
    if not needs_cleanup:
        return labels, predecessors
    for v, p in enumerate(predecessors):
        if p == effective_root:
            predecessors[v] = v
    graph.remove_hyper_root()
    return labels[: graph.order].copy(), predecessors[: graph.order]


__all__ = ["normalize_roots", "reduce", "restore"]
