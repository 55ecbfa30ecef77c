"""Command-line interface for computing shortest path trees."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Tuple

from .exceptions import ConfigError, GraphFormatError, InputError, SPTError
from .export import export_tree_graphml, export_tree_json
from .generator import generate_graph
from .graph import Graph
from .io import parse_roots, read_graph
from .logger import StdLogger
from .solver import Algorithm, SolverConfig, SPTSolver

EXAMPLE_ADJ = """# order, then one line of dest:weight tokens per vertex
4
1:2 2:5
2:1 3:4
3:1

"""

EXIT_OK = 0
EXIT_NO_LOWER_BOUND = 2
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str]) -> Tuple[Graph, int, int]:
    """Build a :class:`Graph` from a graph file."""
    p = Path(path)
    if not p.exists():
        raise InputError(f"graph file not found: {path}")
    G = read_graph(path, fmt)
    return G, G.order, G.num_edges


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``spt`` command-line tool."""
    examples = (
        "Examples:\n"
        "  spt --edges graph.adj --roots 0\n"
        "  spt --edges graph.csv --roots '0 3' --algorithm spt.s\n"
        "  spt --random --n 100 --m 500 --roots 0,1 --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="spt",
        description="Shortest path tree solver (SPT.L Bellman-Ford / SPT.S Dijkstra)",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity (debug prints every violated Bellman condition)",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to graph file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample adjacency file to stdout and exit",
    )

    p.add_argument(
        "--format",
        choices=["adj", "csv", "jsonl"],
        default=None,
        help="Graph file format (auto-detected from extension)",
    )

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--w-min", type=float, default=1.0, help="Smallest weight (random mode)")
    p.add_argument("--w-max", type=float, default=10.0, help="Largest weight (random mode)")

    p.add_argument(
        "--roots",
        type=str,
        default="0",
        help="Space or comma separated root vertex ids",
    )
    p.add_argument(
        "--algorithm",
        type=str,
        default="spt.l",
        help="spt.l (label-correcting) or spt.s (label-setting); 1 and 0 also work",
    )
    p.add_argument("--max-path", type=float, default=None, help="Seed label for non-roots")
    p.add_argument(
        "--check-weights",
        action="store_true",
        help="Refuse spt.s on graphs with negative edges",
    )
    p.add_argument("--target", type=int, default=None, help="Target vertex id for path output")
    p.add_argument("--print-graph", action="store_true", help="Dump the adjacency lists to stderr")

    p.add_argument("--export-json", type=str, default=None, help="Write the tree as JSON")
    p.add_argument("--export-graphml", type=str, default=None, help="Write the tree as GraphML")
    p.add_argument(
        "--metrics-out",
        type=str,
        default=None,
        help="Write run metrics to this JSON file",
    )

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_ADJ)
        return EXIT_OK

    stream = sys.stdout if args.log_json else sys.stderr
    level = "info" if args.log_json and args.log_level == "warning" else args.log_level
    logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

    try:
        if args.random:
            G = generate_graph(
                n=args.n,
                m=args.m,
                weight_dist="real",
                w_min=args.w_min,
                w_max=args.w_max,
                seed=args.seed,
            ).to_graph()
            n, m = G.order, G.num_edges
        else:
            G, n, m = _build_graph_from_file(args.edges, args.format)

        if args.print_graph:
            sys.stderr.write(G.format() + "\n")

        algorithm = Algorithm.parse(args.algorithm)
        min_w = G.min_weight()
        if algorithm is Algorithm.LABEL_SETTING and min_w is not None and min_w < 0:
            logger.warning(
                "negative_edge",
                min_weight=min_w,
                hint="using spt.l is strongly suggested",
            )

        roots = parse_roots(args.roots, n, logger=logger)
        cfg = SolverConfig(
            algorithm=algorithm,
            max_path=args.max_path,
            check_weights=args.check_weights,
        )

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={n} m={m} algorithm={algorithm.value} roots={roots} "
                f"min_w={min_w} max_w={G.max_weight()} seed={args.seed}\n"
            )

        solver = SPTSolver(G, roots, config=cfg, logger=logger)
        t0 = time.perf_counter()
        res = solver.solve()
        wall_ms = (time.perf_counter() - t0) * 1000.0

        out = {"algorithm": algorithm.value, "max_path": solver.max_path}
        out.update(res.as_dict())

        if res.ok:
            if args.target is not None:
                out["target"] = args.target
                out["path"] = solver.path(args.target)
            if args.export_json:
                with open(args.export_json, "w", encoding="utf-8") as fh:
                    fh.write(export_tree_json(G, res))
            if args.export_graphml:
                with open(args.export_graphml, "w", encoding="utf-8") as fh:
                    fh.write(export_tree_graphml(G, res))

        if args.metrics_out:
            metrics = solver.metrics(wall_ms=wall_ms)
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(metrics), fh)

        logger.info("run", n=n, m=m, algorithm=algorithm.value, roots=roots, **solver.summary())
        if args.log_json:
            logger.info("result", **out)
        else:
            print(json.dumps(out))
        if not res.ok:
            sys.stderr.write("error: negative cycle reachable from the roots (no lower bound)\n")
            return EXIT_NO_LOWER_BOUND
        return EXIT_OK

    except (InputError, ConfigError, GraphFormatError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except SPTError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except Exception as exc:  # pragma: no cover - unexpected
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
