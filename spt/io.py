"""Graph input/output helpers."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .exceptions import EmptyRootSetError, GraphFormatError
from .graph import Graph
from .logger import Logger, NoopLogger

EdgeList = List[Tuple[int, int, float]]

_ORDER_HEADER = re.compile(r"^#\s*order\s*=\s*(\d+)\s*$")


def _fmt_weight(w: float) -> str:
    # nine significant digits round-trip any float32
    return f"{float(w):.9g}"


def parse_adjacency(lines: Iterable[str]) -> Graph:
    """Build a graph from the adjacency token format.

    The first non-empty line holds the vertex count. Each following line
    lists the outgoing edges of the next vertex as whitespace-separated
    ``dest:weight`` tokens; an empty line is a vertex without edges and
    missing trailing lines count as empty. Lines starting with ``#`` are
    skipped.

    Example:
        ```text
        4
        1:2 2:5
        2:1 3:4
        3:1

        ```

    Raises:
        GraphFormatError: On a missing or malformed vertex count, a bad token,
            too many adjacency lines or an out-of-range destination.
    """
    rows = [(i, raw.strip()) for i, raw in enumerate(lines, start=1)]
    rows = [(i, r) for i, r in rows if not r.startswith("#")]
    while rows and not rows[0][1]:
        rows.pop(0)
    if not rows:
        raise GraphFormatError("missing vertex count")

    lineno, head = rows[0]
    try:
        order = int(head)
    except ValueError:
        raise GraphFormatError(f"line {lineno}: expected vertex count, got {head!r}") from None
    if order < 0:
        raise GraphFormatError(f"line {lineno}: vertex count must be >= 0, got {order}")

    body = rows[1:]
    while body and not body[-1][1]:
        body.pop()
    if len(body) > order:
        extra = body[order][0]
        raise GraphFormatError(f"line {extra}: more adjacency lines than {order} vertices")

    G = Graph(order)
    for u, (lineno, row) in enumerate(body):
        for token in row.split():
            dest, sep, weight = token.partition(":")
            try:
                if not sep:
                    raise ValueError(token)
                v = int(dest)
                w = float(weight)
            except ValueError:
                raise GraphFormatError(
                    f"line {lineno}: expected 'dest:weight', got {token!r}"
                ) from None
            if not 0 <= v < order:
                raise GraphFormatError(f"line {lineno}: destination {v} not in [0, {order})")
            G.add_edge(u, v, w)
    return G


def _read_adj(path: Path) -> Graph:
    """Read a graph stored in the adjacency token format."""
    with path.open("r", encoding="utf-8") as fh:
        return parse_adjacency(fh)


def _write_adj(path: Path, G: Graph) -> None:
    """Write ``G`` in the adjacency token format, one line per vertex."""
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"{G.order}\n")
        for u in range(G.order):
            fh.write(" ".join(f"{v}:{_fmt_weight(w)}" for v, w in G.out_edges(u)) + "\n")


def _read_csv(path: Path) -> Graph:
    """Read ``u,v,w`` rows (comma or tab separated).

    The vertex count is taken from a ``# order=N`` header when present,
    otherwise it is the largest vertex id plus one. Other ``#`` lines and
    blank lines are ignored.

    Raises:
        GraphFormatError: On malformed rows or a file without edges or header.
    """
    edges: EdgeList = []
    max_id = -1
    order: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            if row.startswith("#"):
                m = _ORDER_HEADER.match(row)
                if m:
                    order = int(m.group(1))
                continue
            parts = row.replace("\t", ",").split(",")
            if len(parts) < 3:
                raise GraphFormatError(f"line {lineno}: expected 'u,v,w', got {row!r}")
            try:
                u = int(parts[0].strip())
                v = int(parts[1].strip())
                w = float(parts[2].strip())
            except ValueError:
                raise GraphFormatError(f"line {lineno}: expected 'u,v,w', got {row!r}") from None
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if order is None:
        if max_id < 0:
            raise GraphFormatError("no edges parsed from file")
        order = max_id + 1
    return _from_edges(order, edges)


def _write_csv(path: Path, G: Graph) -> None:
    """Write a ``# order=N`` header followed by one ``u,v,w`` row per edge."""
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"# order={G.order}\n")
        for u, v, w in G.edges():
            fh.write(f"{u},{v},{_fmt_weight(w)}\n")


def _read_jsonl(path: Path) -> Graph:
    """Read JSON Lines holding ``{"u", "v", "w"}`` objects.

    An optional ``{"order": N}`` object fixes the vertex count; otherwise it
    is the largest vertex id plus one.
    """
    edges: EdgeList = []
    max_id = -1
    order: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                if "order" in obj:
                    order = int(obj["order"])
                    continue
                u = int(obj["u"])
                v = int(obj["v"])
                w = float(obj["w"])
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"line {lineno}: bad edge record ({exc})") from None
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if order is None:
        if max_id < 0:
            raise GraphFormatError("no edges parsed from file")
        order = max_id + 1
    return _from_edges(order, edges)


def _write_jsonl(path: Path, G: Graph) -> None:
    """Write an ``{"order": N}`` line followed by one JSON object per edge."""
    with path.open("w", encoding="utf-8") as fh:
        fh.write(json.dumps({"order": G.order}) + "\n")
        for u, v, w in G.edges():
            fh.write(json.dumps({"u": u, "v": v, "w": float(w)}) + "\n")


def _from_edges(order: int, edges: EdgeList) -> Graph:
    for u, v, _ in edges:
        if not (0 <= u < order and 0 <= v < order):
            raise GraphFormatError(f"edge ({u}, {v}) outside [0, {order})")
    return Graph.from_edges(order, edges)


_FMT_READERS = {
    "adj": _read_adj,
    "csv": _read_csv,
    "jsonl": _read_jsonl,
}

_FMT_WRITERS = {
    "adj": _write_adj,
    "csv": _write_csv,
    "jsonl": _write_jsonl,
}


def _detect_format(path: Path) -> Optional[str]:
    """Detect the file format from the file extension, or return ``None``."""
    ext = path.suffix.lower()
    if ext in {".adj", ".txt"}:
        return "adj"
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    return None


def read_graph(path: str, fmt: Optional[str] = None) -> Graph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: ``"adj"``, ``"csv"`` or ``"jsonl"``; auto-detected when ``None``.

    Returns:
        The graph described by the file.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    return _FMT_READERS[fmt](p)


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write ``G`` to ``path`` in ``fmt`` (auto-detected from the extension).

    Raises:
        GraphFormatError: If the format is unknown.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"unknown graph format for {path}")
    _FMT_WRITERS[fmt](p, G)


def parse_roots(text: str, order: int, logger: Logger | None = None) -> List[int]:
    """Parse a space or comma separated root list.

    Tokens that are not integers or not vertices of a graph with ``order``
    vertices are skipped with a warning; duplicates are dropped.

    Raises:
        EmptyRootSetError: If no valid root remains.
    """
    logger = logger or NoopLogger()
    roots: List[int] = []
    for token in text.replace(",", " ").split():
        try:
            r = int(token)
        except ValueError:
            logger.warning("root.invalid", token=token, reason="not an integer")
            continue
        if not 0 <= r < order:
            logger.warning("root.invalid", token=token, reason=f"not in [0, {order})")
            continue
        if r not in roots:
            roots.append(r)
    if not roots:
        raise EmptyRootSetError(f"no valid root in {text!r}")
    return roots


__all__ = ["parse_adjacency", "parse_roots", "read_graph", "write_graph"]
