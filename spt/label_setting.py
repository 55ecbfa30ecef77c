"""SPT.S: label-setting shortest path tree solver (Dijkstra with a sorted worklist)."""

from __future__ import annotations

from .base import SPTResult, _SPTSolverBase
from .roots import reduce, restore
from .worklist import LabelOrderedWorklist


class LabelSettingSolver(_SPTSolverBase):
    """Dijkstra style solver for graphs with non-negative weights.

    The worklist is ordered by current labels, but a vertex whose label
    improves while it is already queued keeps its position, so it can be
    popped out of order and then re-inserted and settled again later;
    ``iterations`` counts every such removal.

    A negative edge reached during the solve is a precondition violation
    and trips an assertion; with assertions disabled termination is not
    guaranteed.
    """

    name = "spt.s"

    def solve(self) -> SPTResult:
        """Grow the tree from the roots and return it with the iteration count."""
        root, cleanup = reduce(self.G, self.roots)
        if cleanup:
            self.logger.info("hyper_root.add", vertex=root, roots=self.roots)
        try:
            self._run(root)
        finally:
            labels, pred = restore(self.G, self._labels, self._pred, root, cleanup)
            if cleanup:
                self.logger.info("hyper_root.remove", vertex=root)

        iterations = self.counters["iterations"]
        self.logger.info("solve.done", algorithm=self.name, iterations=iterations)
        return SPTResult(
            labels=labels,
            predecessors=pred,
            iterations=iterations,
            roots=tuple(self.roots),
            max_path=self.max_path,
        )

    def _run(self, root: int) -> None:
        self._seed(root)
        self.logger.info("solve.start", algorithm=self.name, order=self.G.order, root=root)

        Q = LabelOrderedWorklist(self._labels)
        Q.push(root)
        self.counters["pushes"] += 1

        while Q:
            u = Q.pop()
            self.counters["iterations"] += 1
            for v, w in self.G.out_edges(u):
                assert w >= 0, f"negative weight {float(w)} on edge ({u}, {v}) reached by spt.s"
                if self._relax(u, v, w) and Q.push(v):
                    self.counters["pushes"] += 1
        self.counters["max_worklist"] = Q.peak


__all__ = ["LabelSettingSolver"]
