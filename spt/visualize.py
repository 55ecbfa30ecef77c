"""Shortest path tree visualisation with NetworkX + Matplotlib.

Draws every graph edge faintly and the tree edges on top, roots in red.

Example usage:

```
python -m spt.visualize graph.adj --roots 0 --out tree.png
```
OR
```
python -m spt.visualize graph.csv --roots "0 3" \
    --algorithm spt.l --layout kamada_kawai --show-weights
```
"""

from __future__ import annotations

import argparse
import random
from typing import Any, List, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .base import SPTResult
from .export import tree_edge_weights
from .graph import Graph
from .io import parse_roots, read_graph
from .solver import solve


def downsample_edges(
    edges: List[Tuple[int, int, float]],
    max_edges: int,
    keep: Optional[set[Tuple[int, int]]] = None,
    seed: int = 0,
) -> List[Tuple[int, int, float]]:
    """Randomly sample edges if the graph is too large to visualise.

    Edges whose ``(u, v)`` is in ``keep`` are always retained.
    """
    if len(edges) <= max_edges:
        return edges
    keep = keep or set()
    fixed = [e for e in edges if (e[0], e[1]) in keep]
    rest = [e for e in edges if (e[0], e[1]) not in keep]
    rng = random.Random(seed)
    budget = max(0, max_edges - len(fixed))
    return fixed + rng.sample(rest, min(budget, len(rest)))


def draw_tree(
    G: Graph,
    result: SPTResult,
    *,
    ax: Any = None,
    layout: str = "spring",
    show_weights: bool = False,
    node_size: int = 300,
    max_edges: int = 300,
) -> Any:
    """Render ``G`` with the shortest path tree of ``result`` highlighted.

    Args:
        G: Graph the tree was computed on.
        result: Solver result without ``no_lower_bound``.
        ax: Matplotlib axes to draw on; a new figure is created when ``None``.
        layout: ``"spring"``, ``"kamada_kawai"`` or ``"shell"``.
        show_weights: Label tree edges with their weights.
        node_size: Node marker size.
        max_edges: Non-tree edges are sampled down to this many.

    Returns:
        The axes drawn on.
    """
    tree = tree_edge_weights(G, result)
    tree_keys = {(u, v) for u, v, _ in tree}
    edges = downsample_edges([(u, v, float(w)) for u, v, w in G.edges()], max_edges, tree_keys)

    D = nx.DiGraph()
    D.add_nodes_from(range(G.order))
    for u, v, w in edges:
        D.add_edge(u, v, weight=w)

    if layout == "spring":
        pos = nx.spring_layout(D, seed=42)
    elif layout == "kamada_kawai":
        pos = nx.kamada_kawai_layout(D)
    elif layout == "shell":
        pos = nx.shell_layout(D)
    else:
        raise ValueError(f"Unknown layout: {layout}")

    if ax is None:
        _, ax = plt.subplots(figsize=(12, 10))

    roots = set(result.roots)
    node_colors = [
        "tab:red" if v in roots else ("tab:blue" if result.reached(v) else "lightgrey")
        for v in D.nodes
    ]
    nx.draw_networkx_nodes(D, pos, ax=ax, node_color=node_colors, node_size=node_size, alpha=0.9)
    nx.draw_networkx_edges(
        D,
        pos,
        ax=ax,
        edgelist=[(u, v) for u, v, _ in edges if (u, v) not in tree_keys],
        arrowstyle="->",
        arrowsize=10,
        width=0.8,
        alpha=0.3,
        edge_color="grey",
    )
    nx.draw_networkx_edges(
        D,
        pos,
        ax=ax,
        edgelist=sorted(tree_keys),
        arrowstyle="->",
        arrowsize=14,
        width=2.0,
        edge_color="tab:green",
    )
    nx.draw_networkx_labels(
        D,
        pos,
        ax=ax,
        labels={v: f"{v}\n{float(result.labels[v]):g}" for v in D.nodes},
        font_size=8,
    )
    if show_weights:
        nx.draw_networkx_edge_labels(
            D,
            pos,
            ax=ax,
            edge_labels={(u, v): f"{w:g}" for u, v, w in tree},
            font_size=7,
        )

    ax.set_title(f"Shortest path tree, roots {sorted(roots)}", fontsize=14)
    ax.axis("off")
    return ax


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Visualize a shortest path tree")
    parser.add_argument("path", help="Path to a graph file")
    parser.add_argument("--format", choices=["adj", "csv", "jsonl"], default=None)
    parser.add_argument("--roots", default="0", help="Space or comma separated roots")
    parser.add_argument("--algorithm", default="spt.l", help="spt.l or spt.s")
    parser.add_argument("--max-edges", type=int, default=300,
                        help="Maximum non-tree edges to display (sampling if larger)")
    parser.add_argument("--layout", choices=["spring", "kamada_kawai", "shell"],
                        default="spring")
    parser.add_argument("--show-weights", action="store_true",
                        help="Render tree edge weights (recommended only for small graphs)")
    parser.add_argument("--node-size", type=int, default=300)
    parser.add_argument("--out", default=None, help="Save the figure instead of showing it")

    args = parser.parse_args(argv)

    G = read_graph(args.path, args.format)
    roots = parse_roots(args.roots, G.order)
    result = solve(G, roots, algorithm=args.algorithm).raise_for_status()

    ax = draw_tree(
        G,
        result,
        layout=args.layout,
        show_weights=args.show_weights,
        node_size=args.node_size,
        max_edges=args.max_edges,
    )
    ax.figure.tight_layout()
    if args.out:
        ax.figure.savefig(args.out)
    else:
        plt.show()


if __name__ == "__main__":
    main()
