"""SPT.L: label-correcting shortest path tree solver (Bellman-Ford with a FIFO worklist).

Tolerates negative edge weights. A vertex leaves the worklist at most
``order - 1`` times while labels converge, so a vertex removed ``order``
times proves a negative cycle reachable from the roots, and the solve stops
with a result flagged ``no_lower_bound``.
"""

from __future__ import annotations

from typing import List

from .base import SPTResult, _SPTSolverBase
from .roots import reduce, restore
from .worklist import FifoWorklist


class LabelCorrectingSolver(_SPTSolverBase):
    """Bellman-Ford style solver.

    Example:
        ```python
        >>> g = Graph.from_edges(3, [(0, 1, 4), (1, 2, -2), (0, 2, 5)])
        >>> LabelCorrectingSolver(g, [0], max_path=13.0).solve().labels.tolist()
        [0.0, 4.0, 2.0]
        ```
    """

    name = "spt.l"

    def solve(self) -> SPTResult:
        """Grow the tree from the roots until no Bellman condition is violated.

        Returns:
            The tree and the number of worklist removals, or a result with
            ``no_lower_bound=True`` if a negative cycle was found.
        """
        root, cleanup = reduce(self.G, self.roots)
        if cleanup:
            self.logger.info("hyper_root.add", vertex=root, roots=self.roots)
        try:
            no_lower_bound = self._run(root)
        finally:
            labels, pred = restore(self.G, self._labels, self._pred, root, cleanup)
            if cleanup:
                self.logger.info("hyper_root.remove", vertex=root)

        iterations = self.counters["iterations"]
        if no_lower_bound:
            return SPTResult(
                labels=labels,
                predecessors=pred,
                iterations=None,
                no_lower_bound=True,
                roots=tuple(self.roots),
                max_path=self.max_path,
            )
        self.logger.info("solve.done", algorithm=self.name, iterations=iterations)
        return SPTResult(
            labels=labels,
            predecessors=pred,
            iterations=iterations,
            roots=tuple(self.roots),
            max_path=self.max_path,
        )

    def _run(self, root: int) -> bool:
        """Run the FIFO loop from ``root``; return ``True`` on a negative cycle."""
        n = self.G.order
        self._seed(root)
        self.logger.info("solve.start", algorithm=self.name, order=n, root=root)

        Q = FifoWorklist()
        Q.push(root)
        self.counters["pushes"] += 1
        removed: List[int] = [0] * n
        # With a single vertex the root's first removal would already hit n.
        limit = max(n, 2)

        while Q:
            u = Q.pop()
            self.counters["iterations"] += 1
            removed[u] += 1
            if removed[u] >= limit:
                self.logger.warning(
                    "negative_cycle",
                    vertex=u,
                    removals=removed[u],
                    iterations=self.counters["iterations"],
                )
                self.counters["max_worklist"] = Q.peak
                return True

            for v, w in self.G.out_edges(u):
                if self._relax(u, v, w) and Q.push(v):
                    self.counters["pushes"] += 1
        self.counters["max_worklist"] = Q.peak
        return False


__all__ = ["LabelCorrectingSolver"]
