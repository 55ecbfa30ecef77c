"""Directed weighted graph store used by the SPT solvers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .exceptions import (
    AlgorithmError,
    EmptyRootSetError,
    GraphFormatError,
    InvalidOrderError,
    VertexOutOfRangeError,
)

if TYPE_CHECKING:  # pragma: no cover
    import networkx as nx

Vertex = int
Weight = np.float32
Edge = Tuple[Vertex, Vertex, float]


@dataclass
class Graph:
    """Directed graph with single-precision edge weights.

    Vertices are the dense integers ``0`` .. ``order-1``. Each vertex owns an
    ordered list of its outgoing ``(destination, weight)`` pairs; parallel
    edges are kept and relaxed independently. Negative weights are allowed.

    Attributes:
        order: Number of vertices, including a hyper-root while one exists.
        adj: Outgoing adjacency lists indexed by vertex id.
    """

    order: int

    def __post_init__(self) -> None:
        """Validate the vertex count and initialize adjacency lists."""
        if isinstance(self.order, bool) or not isinstance(self.order, (int, np.integer)):
            raise InvalidOrderError(f"graph order must be an integer, got {self.order!r}")
        if self.order < 0:
            raise InvalidOrderError(f"graph order must be >= 0, got {self.order}")
        self.order = int(self.order)
        self.adj: List[List[Tuple[Vertex, Weight]]] = [[] for _ in range(self.order)]
        self._hyper_root: Optional[Vertex] = None

    def check_vertex(self, u: Vertex) -> Vertex:
        """Return ``u`` as a plain ``int`` or raise :class:`VertexOutOfRangeError`."""
        if isinstance(u, bool) or not isinstance(u, (int, np.integer)):
            raise VertexOutOfRangeError(u, self.order)
        if not 0 <= u < self.order:
            raise VertexOutOfRangeError(u, self.order)
        return int(u)

    def add_edge(self, source: Vertex, destination: Vertex, weight: float) -> None:
        """Append a directed edge to ``source``'s adjacency list.

        Args:
            source: Tail vertex.
            destination: Head vertex.
            weight: Finite edge weight, stored as ``float32``.

        Raises:
            VertexOutOfRangeError: If either endpoint is not in ``[0, order)``.
            GraphFormatError: If ``weight`` is not a finite number.

        Examples:
            ```python
            >>> g = Graph(2)
            >>> g.add_edge(0, 1, -1.5)
            >>> [(v, float(w)) for v, w in g.out_edges(0)]
            [(1, -1.5)]
            ```
        """
        u = self.check_vertex(source)
        v = self.check_vertex(destination)
        if isinstance(weight, bool) or not isinstance(weight, (int, float, np.number)):
            raise GraphFormatError(f"non-numeric weight {weight!r} on edge ({u}, {v})")
        if not math.isfinite(float(weight)):
            raise GraphFormatError(f"non-finite weight {weight} on edge ({u}, {v})")
        self.adj[u].append((v, Weight(weight)))

    @classmethod
    def from_edges(cls, order: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph from an iterable of ``(u, v, w)`` edges.

        Args:
            order: Number of vertices.
            edges: Iterable of ``(u, v, w)`` tuples, kept in iteration order.

        Returns:
            A graph populated with the provided edges.
        """
        g = cls(order)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), float(w))
        return g

    def out_edges(self, vertex: Vertex) -> Iterable[Tuple[Vertex, Weight]]:
        """Return the outgoing ``(destination, weight)`` pairs of ``vertex``.

        The returned view is lazy and can be iterated any number of times;
        each iteration yields the edges in insertion order.
        """
        return _OutEdges(self.adj[self.check_vertex(vertex)])

    def out_degree(self, u: Vertex) -> int:
        """Return the number of outgoing edges of vertex ``u``."""
        return len(self.adj[self.check_vertex(u)])

    def edges(self) -> Iterator[Tuple[Vertex, Vertex, Weight]]:
        """Iterate over all edges as ``(u, v, w)`` in vertex then insertion order."""
        for u in range(self.order):
            for v, w in self.adj[u]:
                yield u, v, w

    @property
    def num_edges(self) -> int:
        """Total number of edges, parallel edges included."""
        return sum(len(lst) for lst in self.adj)

    def min_weight(self) -> Optional[float]:
        """Return the smallest edge weight, or ``None`` for an edgeless graph."""
        weights = [w for lst in self.adj for _, w in lst]
        return float(min(weights)) if weights else None

    def max_weight(self) -> Optional[float]:
        """Return the largest edge weight, or ``None`` for an edgeless graph."""
        weights = [w for lst in self.adj for _, w in lst]
        return float(max(weights)) if weights else None

    # ---------- hyper-root ------------------------------------------------

    @property
    def has_hyper_root(self) -> bool:
        """``True`` between :meth:`add_hyper_root` and :meth:`remove_hyper_root`."""
        return self._hyper_root is not None

    def add_hyper_root(self, roots: Iterable[Vertex]) -> Vertex:
        """Append a synthetic vertex with a zero-weight edge to every root.

        Duplicate roots are ignored; edges follow first-seen order. The graph
        is left untouched if validation fails.

        Args:
            roots: Vertices the hyper-root connects to.

        Returns:
            The id of the new vertex, i.e. the order before augmentation.

        Raises:
            EmptyRootSetError: If ``roots`` is empty.
            VertexOutOfRangeError: If a root is not a valid vertex id.
            AlgorithmError: If the graph already carries a hyper-root.
        """
        if self._hyper_root is not None:
            raise AlgorithmError("graph already has a hyper-root; remove it first")
        unique = list(dict.fromkeys(self.check_vertex(r) for r in roots))
        if not unique:
            raise EmptyRootSetError("cannot add a hyper-root for an empty root set")

        hyper = self.order
        self.adj.append([(r, Weight(0.0)) for r in unique])
        self.order += 1
        self._hyper_root = hyper
        return hyper

    def remove_hyper_root(self) -> None:
        """Drop the hyper-root added by the matching :meth:`add_hyper_root`.

        Calling this without a prior augmentation, or after other vertices
        were appended, violates the contract and trips an assertion.
        """
        assert self._hyper_root is not None, "remove_hyper_root() without add_hyper_root()"
        assert self._hyper_root == self.order - 1, "hyper-root is no longer the last vertex"
        self.adj.pop()
        self.order -= 1
        self._hyper_root = None

    # ---------- conversions -----------------------------------------------

    def to_networkx(self) -> "nx.MultiDiGraph":
        """Return a :class:`networkx.MultiDiGraph` copy with ``weight`` attributes."""
        import networkx as nx

        G = nx.MultiDiGraph()
        G.add_nodes_from(range(self.order))
        G.add_weighted_edges_from((u, v, float(w)) for u, v, w in self.edges())
        return G

    def format(self) -> str:
        """Return one ``u -> v (w), ...`` line per vertex."""
        lines = []
        for u in range(self.order):
            targets = ", ".join(f"{v} ({float(w):.3f})" for v, w in self.adj[u])
            lines.append(f"{u} -> {targets}".rstrip())
        return "\n".join(lines)


class _OutEdges:
    """Restartable read-only view over one adjacency list."""

    __slots__ = ("_edges",)

    def __init__(self, edges: List[Tuple[Vertex, Weight]]) -> None:
        self._edges = edges

    def __iter__(self) -> Iterator[Tuple[Vertex, Weight]]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"_OutEdges({[(v, float(w)) for v, w in self._edges]!r})"


__all__ = ["Graph", "Vertex", "Weight", "Edge"]
