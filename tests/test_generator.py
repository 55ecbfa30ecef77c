from __future__ import annotations

import pytest

from spt import ConfigError, solve
from spt.generator import generate_graph, negative_cycle_graph


def test_generate_is_deterministic():
    a = generate_graph(n=20, m=50, seed=3)
    b = generate_graph(n=20, m=50, seed=3)
    assert a.edges == b.edges
    assert a.m == 50


def test_erdos_renyi_backbone_and_unique_pairs():
    g = generate_graph(n=15, m=40, seed=1)
    pairs = [(u, v) for u, v, _ in g.edges]
    assert len(pairs) == len(set(pairs))
    assert all((i, i + 1) in set(pairs) for i in range(14))
    assert all(u != v for u, v in pairs)


def test_edge_count_is_capped():
    g = generate_graph(n=4, m=100, seed=0)
    assert g.m == 12


def test_dag_edges_point_forward():
    g = generate_graph(n=12, m=30, graph_type="dag", w_min=-5, w_max=5, seed=2)
    assert all(u < v for u, v, _ in g.edges)
    assert all(-5 <= w <= 5 for _, _, w in g.edges)


def test_grid_is_bidirectional():
    g = generate_graph(n=9, graph_type="grid", seed=0)
    pairs = {(u, v) for u, v, _ in g.edges}
    assert len(pairs) == 24
    assert all((v, u) in pairs for u, v in pairs)


def test_weight_distributions():
    ints = generate_graph(n=10, m=30, weight_dist="small_int", w_min=2, w_max=50, seed=0)
    assert all(w == int(w) and 2 <= w <= 12 for _, _, w in ints.edges)
    reals = generate_graph(n=10, m=30, weight_dist="real", w_min=0.0, w_max=1.0, seed=0)
    assert all(0.0 <= w <= 1.0 for _, _, w in reals.edges)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n": 0},
        {"n": 5, "m": -1},
        {"n": 5, "graph_type": "tree"},
        {"n": 5, "weight_dist": "normal"},
        {"n": 5, "w_min": 10, "w_max": 1},
        {"n": 10, "graph_type": "grid", "grid_rows": 2, "grid_cols": 2},
    ],
)
def test_generate_rejects_bad_config(kwargs):
    with pytest.raises(ConfigError):
        generate_graph(**kwargs)


def test_to_graph():
    g = generate_graph(n=6, m=10, seed=4)
    graph = g.to_graph()
    assert graph.order == 6
    assert graph.num_edges == g.m


@pytest.mark.parametrize("k, tail", [(1, 0), (2, 3), (5, 1)])
def test_negative_cycle_graph(k, tail):
    gen = negative_cycle_graph(k, tail=tail, weight=2.0)
    assert gen.n == k + tail
    assert sum(w for u, v, w in gen.edges if u >= tail) == -2.0
    assert solve(gen.to_graph(), [0], algorithm="spt.l").no_lower_bound
