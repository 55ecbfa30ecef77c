"""Directed weighted graph generator for exercising and benchmarking the solvers.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Random directed graphs with uniformly sampled edges. May contain cycles,
   so negative weights can create negative cycles.

2. dag
   Directed acyclic graphs (edges only from lower- to higher-index vertices).
   Safe for negative weights: there is no cycle at all.

3. grid
   2D grid graphs with edges between neighbouring vertices in both
   directions. Many equal-length shortest paths.

WEIGHT DISTRIBUTIONS
--------------------
- uniform: integers evenly distributed in ``[w_min, w_max]``
- small_int: integers concentrated in ``[w_min, w_min + 10]`` (many ties)
- real: floats evenly distributed in ``[w_min, w_max)``
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import Graph

EdgeList = List[Tuple[int, int, float]]

WeightDist = Literal["uniform", "small_int", "real"]
GraphType = Literal["erdos_renyi", "dag", "grid"]


@dataclass(frozen=True)
class GeneratedGraph:
    n: int
    edges: EdgeList
    metadata: Dict[str, object] = field(default_factory=dict)

    @property
    def m(self) -> int:
        return len(self.edges)

    def to_graph(self) -> Graph:
        """Return the generated instance as a :class:`~spt.graph.Graph`."""
        return Graph.from_edges(self.n, self.edges)


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: float, w_max: float) -> float:
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")

    if dist == "uniform":
        return float(rng.randint(int(w_min), int(w_max)))

    if dist == "small_int":
        hi = min(int(w_max), int(w_min) + 10)
        return float(rng.randint(int(w_min), hi))

    if dist == "real":
        return rng.uniform(w_min, w_max)

    raise ConfigError(f"Unknown weight distribution: {dist}")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    graph_type: GraphType = "erdos_renyi",
    weight_dist: WeightDist = "uniform",
    w_min: float = 1,
    w_max: float = 100,
    seed: Optional[int] = 0,
    allow_self_loops: bool = False,
    ensure_weakly_connected: bool = True,
    grid_rows: Optional[int] = None,
    grid_cols: Optional[int] = None,
) -> GeneratedGraph:
    """Generate a directed weighted graph.

    Notes:
    - If ensure_weakly_connected=True, a backbone chain (i->i+1) is added
      first, so vertex 0 reaches every vertex (except in grids, which are
      connected already).
    - Edges are unique per ordered pair; parallel edges are never generated.
    - Negative ``w_min`` is accepted. Only ``dag`` guarantees that no
      negative cycle results.

    Raises:
        ConfigError: On invalid sizes, types or weight ranges.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if m is not None and m < 0:
        raise ConfigError("m must be >= 0.")

    rng = random.Random(seed)
    if m is None:
        m = min(n * 4, n * (n - 1))

    edges_set: Set[Tuple[int, int]] = set()
    edges: EdgeList = []

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        key = (u, v)
        if key in edges_set:
            return
        w = _sample_weight(rng, weight_dist, w_min, w_max)
        edges_set.add(key)
        edges.append((u, v, w))

    if ensure_weakly_connected and n >= 2 and graph_type != "grid":
        for i in range(n - 1):
            add_edge(i, i + 1)

    if graph_type == "erdos_renyi":
        target_m = min(m, n * n if allow_self_loops else n * (n - 1))
        while len(edges) < target_m:
            add_edge(rng.randrange(n), rng.randrange(n))

    elif graph_type == "dag":
        target_m = min(m, n * (n - 1) // 2)
        while len(edges) < target_m:
            u = rng.randrange(n)
            v = rng.randrange(n)
            if u == v:
                continue
            if u > v:
                u, v = v, u
            add_edge(u, v)

    elif graph_type == "grid":
        if grid_rows is None or grid_cols is None:
            grid_rows = max(1, int(math.isqrt(n)))
            grid_cols = max(1, (n + grid_rows - 1) // grid_rows)
        if grid_rows * grid_cols < n:
            raise ConfigError("grid_rows*grid_cols must be >= n.")
        for r in range(grid_rows):
            for c in range(grid_cols):
                u = r * grid_cols + c
                if u >= n:
                    continue
                right = u + 1
                if c + 1 < grid_cols and right < n:
                    add_edge(u, right)
                    add_edge(right, u)
                down = u + grid_cols
                if r + 1 < grid_rows and down < n:
                    add_edge(u, down)
                    add_edge(down, u)

    else:
        raise ConfigError(f"Unknown graph_type: {graph_type}")

    return GeneratedGraph(
        n=n,
        edges=edges,
        metadata={
            "graph_type": graph_type,
            "weight_dist": weight_dist,
            "w_min": w_min,
            "w_max": w_max,
            "seed": seed,
            "ensure_weakly_connected": ensure_weakly_connected,
            "allow_self_loops": allow_self_loops,
        },
    )


def negative_cycle_graph(k: int, tail: int = 0, weight: float = 1.0) -> GeneratedGraph:
    """Return a ``k``-cycle of total weight ``-weight`` reachable from vertex 0.

    Vertices ``0 .. tail-1`` form a lead-in chain ending on the cycle, which
    occupies vertices ``tail .. tail+k-1``.
    """
    if k < 1:
        raise ConfigError("k must be >= 1.")
    edges: EdgeList = [(i, i + 1, weight) for i in range(tail)]
    cycle = list(range(tail, tail + k))
    for a, b in zip(cycle, cycle[1:]):
        edges.append((a, b, weight))
    edges.append((cycle[-1], cycle[0], -weight * k))
    return GeneratedGraph(n=tail + k, edges=edges, metadata={"graph_type": "negative_cycle"})


__all__ = ["GeneratedGraph", "generate_graph", "negative_cycle_graph"]
