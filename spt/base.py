"""Results, metrics and the relaxation step shared by both SPT solvers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import EmptyRootSetError, NoLowerBoundError
from .graph import Graph, Vertex, Weight
from .logger import Logger, NoopLogger
from .roots import normalize_roots


@dataclass(frozen=True, eq=False)
class SPTResult:
    """Labels and predecessors describing a shortest path tree.

    Roots are their own predecessor. A vertex no root reaches keeps the
    seed label ``max_path``. When ``no_lower_bound`` is set a negative cycle
    is reachable from the roots and neither array is meaningful.

    Attributes:
        labels: Distance from the nearest root for every vertex (``float32``).
        predecessors: Parent of every vertex in the tree.
        iterations: Worklist removals performed, ``None`` on a negative cycle.
        no_lower_bound: ``True`` if a negative cycle was detected.
        roots: Distinct roots the tree was grown from.
        max_path: Seed label given to every non-root vertex.
    """

    labels: npt.NDArray[np.float32]
    predecessors: List[Vertex]
    iterations: Optional[int]
    no_lower_bound: bool = False
    roots: Tuple[Vertex, ...] = ()
    max_path: float = float("inf")

    @property
    def ok(self) -> bool:
        """``True`` unless a negative cycle was detected."""
        return not self.no_lower_bound

    def reached(self, v: Vertex) -> bool:
        """Return ``True`` if ``v`` is a root or its label improved on the seed."""
        return v in self.roots or bool(self.labels[v] < np.float32(self.max_path))

    def total_cost(self) -> float:
        """Sum of all labels, accumulated in ``float32``."""
        return float(np.sum(self.labels, dtype=np.float32))

    def raise_for_status(self) -> "SPTResult":
        """Return ``self`` or raise :class:`NoLowerBoundError` on a negative cycle."""
        if self.no_lower_bound:
            raise NoLowerBoundError(
                f"a negative cycle is reachable from roots {list(self.roots)}"
            )
        return self

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable view of the result."""
        return {
            "roots": list(self.roots),
            "iterations": self.iterations,
            "no_lower_bound": self.no_lower_bound,
            "labels": [float(x) for x in self.labels],
            "predecessors": list(self.predecessors),
            "total_cost": None if self.no_lower_bound else self.total_cost(),
        }


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    order: int
    edges: int
    algorithm: str
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass
class _SPTSolverBase:
    """Common pieces shared between the label-correcting and label-setting solvers.

    Holds the label/predecessor arrays of the current solve and implements
    the Bellman test and relaxation both algorithms are built on.
    """

    G: Graph
    roots: List[Vertex]
    max_path: float
    logger: Optional[Logger] = None
    name: ClassVar[str] = "spt"

    def __post_init__(self) -> None:
        self.roots = normalize_roots(self.roots)
        if not self.roots:
            raise EmptyRootSetError("at least one root is required")
        for r in self.roots:
            self.G.check_vertex(r)
        self.logger = self.logger or NoopLogger()
        self._labels: npt.NDArray[np.float32] = np.zeros(0, dtype=np.float32)
        self._pred: List[Vertex] = []
        self.counters: Dict[str, int] = {
            "iterations": 0,
            "edges_scanned": 0,
            "relaxations": 0,
            "pushes": 0,
            "max_worklist": 0,
        }

    # ---------- relaxation ------------------------------------------------

    def _seed(self, root: Vertex) -> None:
        """Build the initial tree: every vertex hangs off ``root`` at ``max_path``."""
        n = self.G.order
        self._labels = np.full(n, self.max_path, dtype=np.float32)
        self._labels[root] = 0.0
        self._pred = [root] * n
        for k in self.counters:
            self.counters[k] = 0

    def _violates_bellman(self, u: Vertex, v: Vertex, w: Weight) -> bool:
        """Return ``True`` if ``labels[v] > labels[u] + w``."""
        return bool(self._labels[v] > self._labels[u] + w)

    def _relax(self, u: Vertex, v: Vertex, w: Weight) -> bool:
        """Relax edge ``(u, v)`` if it violates the Bellman condition.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Edge weight.

        Returns:
            ``True`` if ``v``'s label and predecessor were updated.
        """
        self.counters["edges_scanned"] += 1
        if not self._violates_bellman(u, v, w):
            return False
        self.logger.debug(
            "bellman.violated",
            u=u,
            v=v,
            d_u=float(self._labels[u]),
            w=float(w),
            d_v=float(self._labels[v]),
        )
        self._labels[v] = self._labels[u] + w
        self._pred[v] = u
        self.counters["relaxations"] += 1
        return True

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the most recent run."""
        return SolverMetrics(
            order=self.G.order,
            edges=self.G.num_edges,
            algorithm=self.name,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


__all__ = ["SPTResult", "SolverMetrics"]
