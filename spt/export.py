"""Export utilities for shortest path trees."""

from __future__ import annotations

import json
from typing import List, Tuple

from .base import SPTResult
from .graph import Graph
from .path import tree_edges


def tree_edge_weights(
    G: Graph, result: SPTResult, eps: float = 1e-5
) -> List[Tuple[int, int, float]]:
    """Return the tree edges with the weight of the graph edge they stand for.

    Among parallel edges the one matching ``labels[v] - labels[u]`` is
    chosen; when none matches within ``eps`` the lightest is used.

    Args:
        G: Graph the tree was computed on.
        result: Solver result (must not carry ``no_lower_bound``).
        eps: Numerical tolerance on the label difference.

    Returns:
        ``(u, v, w)`` triples. Vertices no root reaches are left out.
    """
    result.raise_for_status()
    out: List[Tuple[int, int, float]] = []
    for u, v in tree_edges(result.predecessors):
        if not result.reached(v):
            continue
        candidates = [float(w) for dst, w in G.out_edges(u) if dst == v]
        gap = float(result.labels[v]) - float(result.labels[u])
        matching = [w for w in candidates if abs(w - gap) <= eps]
        out.append((u, v, min(matching or candidates)))
    return out


def export_tree_json(G: Graph, result: SPTResult) -> str:
    """Return a JSON string with labelled nodes and tree edges."""
    roots = set(result.roots)
    data = {
        "roots": list(result.roots),
        "iterations": result.iterations,
        "nodes": [
            {
                "id": v,
                "label": float(result.labels[v]),
                "root": v in roots,
                "reached": result.reached(v),
            }
            for v in range(G.order)
        ],
        "edges": [
            {"source": u, "target": v, "weight": w}
            for (u, v, w) in tree_edge_weights(G, result)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(G: Graph, result: SPTResult) -> str:
    """Return a minimal GraphML string for the shortest path tree."""
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="d" for="node" attr.name="label" attr.type="double"/>')
    lines.append('  <key id="w" for="edge" attr.name="weight" attr.type="double"/>')
    lines.append('  <graph id="SPT" edgedefault="directed">')
    for i in range(G.order):
        lines.append(f'    <node id="n{i}"><data key="d">{float(result.labels[i])!r}</data></node>')
    for u, v, w in tree_edge_weights(G, result):
        lines.append(f'    <edge source="n{u}" target="n{v}"><data key="w">{w!r}</data></edge>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["tree_edge_weights", "export_tree_json", "export_tree_graphml"]
