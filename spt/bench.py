"""Micro-benchmark comparing SPT.S against SPT.L on random graphs.

Run this module as a script to time both solvers across several random
graphs and check that their labels agree.

Example:
```bash
python -m spt.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```

Use ``--mem`` to record peak memory usage during solver runs and
``--roots 3`` to grow trees from several roots at once.
"""

from __future__ import annotations

import argparse
import csv
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .base import SPTResult, SolverMetrics
from .generator import generate_graph
from .graph import Graph
from .solver import Algorithm, SolverConfig, SPTSolver


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: Dict[Algorithm, SolverMetrics]
    max_abs_err: float


def _timed_solve(
    G: Graph, roots: List[int], algorithm: Algorithm, track_mem: bool
) -> Tuple[SPTResult, SolverMetrics]:
    solver = SPTSolver(G, roots, SolverConfig(algorithm=algorithm))
    if track_mem:
        import tracemalloc

        tracemalloc.start()
        t0 = time.perf_counter()
        res = solver.solve()
        t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        peak_mib: Optional[float] = peak / (1024 * 1024)
    else:
        t0 = time.perf_counter()
        res = solver.solve()
        t1 = time.perf_counter()
        peak_mib = None
    return res, solver.metrics(wall_ms=(t1 - t0) * 1000.0, peak_mib=peak_mib)


def run_once(
    n: int,
    m: int,
    seed: int = 0,
    n_roots: int = 1,
    graph_type: str = "erdos_renyi",
    track_mem: bool = False,
) -> BenchResult:
    """Run both solvers once on a random graph and compare their labels.

    Args:
        n: Number of vertices.
        m: Number of edges.
        seed: Seed for the random graph generator and root choice.
        n_roots: Number of distinct roots.
        graph_type: Generator family, see :func:`spt.generator.generate_graph`.
        track_mem: Record peak memory with :mod:`tracemalloc`.

    Returns:
        Per-algorithm metrics and the largest label difference.
    """
    G = generate_graph(
        n=n, m=m, graph_type=graph_type, weight_dist="real", w_min=0.0, w_max=10.0, seed=seed
    ).to_graph()
    rng = np.random.default_rng(seed)
    roots = sorted(int(r) for r in rng.choice(n, size=min(n_roots, n), replace=False))

    results: Dict[Algorithm, SPTResult] = {}
    metrics: Dict[Algorithm, SolverMetrics] = {}
    for algorithm in Algorithm:
        results[algorithm], metrics[algorithm] = _timed_solve(G, roots, algorithm, track_mem)

    a = results[Algorithm.LABEL_SETTING].labels
    b = results[Algorithm.LABEL_CORRECTING].labels
    max_err = float(np.max(np.abs(a - b))) if n else 0.0
    return BenchResult(metrics=metrics, max_abs_err=max_err)


def _p95(values: List[float]) -> float:
    if len(values) < 2:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def main(argv: List[str] | None = None) -> None:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument("--roots", type=int, default=1, help="Number of roots per tree")
    parser.add_argument(
        "--graph-type", choices=["erdos_renyi", "dag", "grid"], default="erdos_renyi"
    )
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    parser.add_argument(
        "--mem",
        action="store_true",
        help="Profile peak memory usage (MiB) using tracemalloc",
    )
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:  # pragma: no cover - argparse handles
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    times: Dict[Tuple[int, int, Algorithm], List[float]] = {}
    iters: Dict[Tuple[int, int, Algorithm], List[int]] = {}
    worst_err = 0.0

    for n, m in sizes:
        for trial in range(args.trials):
            res = run_once(
                n=n,
                m=m,
                seed=args.seed_base + trial,
                n_roots=args.roots,
                graph_type=args.graph_type,
                track_mem=args.mem,
            )
            worst_err = max(worst_err, res.max_abs_err)
            for algorithm, mtx in res.metrics.items():
                row: List[object] = [
                    mtx.order,
                    mtx.edges,
                    mtx.algorithm,
                    trial,
                    f"{mtx.wall_ms:.6f}",
                    mtx.counters["iterations"],
                    mtx.counters["edges_scanned"],
                    mtx.counters["relaxations"],
                    mtx.counters["max_worklist"],
                    f"{res.max_abs_err:.6g}",
                ]
                if args.mem:
                    row.append(f"{(mtx.peak_mib or 0.0):.6f}")
                rows.append(row)
                times.setdefault((n, m, algorithm), []).append(mtx.wall_ms)
                iters.setdefault((n, m, algorithm), []).append(mtx.counters["iterations"])

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            csv_header = [
                "order",
                "edges",
                "algorithm",
                "trial",
                "wall_ms",
                "iterations",
                "edges_scanned",
                "relaxations",
                "max_worklist",
                "max_abs_err",
            ]
            if args.mem:
                csv_header.append("peak_mib")
            writer.writerow(csv_header)
            writer.writerows(rows)

    print(f"{'n':>6} {'m':>7} {'algo':>6} {'iters':>8} {'med_ms':>10} {'p95_ms':>10}")
    for (n, m, algorithm), wall in times.items():
        it_med = statistics.median(iters[(n, m, algorithm)])
        print(
            f"{n:6d} {m:7d} {algorithm.value:>6} {int(it_med):8d}"
            f" {statistics.median(wall):10.2f} {_p95(wall):10.2f}"
        )
    print(f"max |spt.s - spt.l| = {worst_err:.6g}")


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
