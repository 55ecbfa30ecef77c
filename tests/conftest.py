from __future__ import annotations

import pytest

from spt import Graph


@pytest.fixture
def diamond() -> Graph:
    """Four vertices, root 0; labels [0, 2, 3, 4] and predecessors [0, 0, 1, 2]."""
    return Graph.from_edges(
        4,
        [(0, 1, 2), (0, 2, 5), (1, 2, 1), (1, 3, 4), (2, 3, 1)],
    )


@pytest.fixture
def triangle_cycle() -> Graph:
    """0 -> 1 -> 2 -> 0 with total weight -1."""
    return Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (2, 0, -3)])


@pytest.fixture
def two_sources() -> Graph:
    """Chain 0 -> 1 -> 2 -> 3 -> 4 plus a cheap second entry 5 -> 3."""
    return Graph.from_edges(
        6,
        [(0, 1, 1), (1, 2, 1), (2, 3, 5), (3, 4, 1), (5, 3, 1), (5, 2, 10)],
    )
