from __future__ import annotations

import pytest

from spt import (
    Algorithm,
    AlgorithmError,
    ConfigError,
    Graph,
    LabelCorrectingSolver,
    LabelSettingSolver,
    NoLowerBoundError,
    SolverConfig,
    SPTSolver,
    VertexOutOfRangeError,
    default_max_path,
    solve,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("spt.l", Algorithm.LABEL_CORRECTING),
        ("SPT.L", Algorithm.LABEL_CORRECTING),
        (1, Algorithm.LABEL_CORRECTING),
        ("bellman-ford", Algorithm.LABEL_CORRECTING),
        ("label_correcting", Algorithm.LABEL_CORRECTING),
        ("spt.s", Algorithm.LABEL_SETTING),
        (0, Algorithm.LABEL_SETTING),
        (" Dijkstra ", Algorithm.LABEL_SETTING),
        ("label-setting", Algorithm.LABEL_SETTING),
        (Algorithm.LABEL_SETTING, Algorithm.LABEL_SETTING),
    ],
)
def test_algorithm_parse(value, expected):
    assert Algorithm.parse(value) is expected


def test_algorithm_parse_unknown():
    with pytest.raises(ConfigError):
        Algorithm.parse("a-star")


def test_algorithm_solver_cls():
    assert Algorithm.LABEL_CORRECTING.solver_cls is LabelCorrectingSolver
    assert Algorithm.LABEL_SETTING.solver_cls is LabelSettingSolver


def test_config_accepts_aliases():
    assert SolverConfig(algorithm="dijkstra").algorithm is Algorithm.LABEL_SETTING


@pytest.mark.parametrize("max_path", [0.0, -1.0, float("nan")])
def test_config_rejects_non_positive_max_path(max_path):
    with pytest.raises(ConfigError):
        SolverConfig(max_path=max_path)


def test_default_max_path(diamond):
    assert default_max_path(diamond) == 4 * 5.0 + 1.0
    assert default_max_path(Graph(3)) == 1.0
    assert default_max_path(Graph.from_edges(2, [(0, 1, -3.0)])) == 1.0


def test_solver_uses_default_max_path(diamond):
    solver = SPTSolver(diamond, [0])
    assert solver.max_path == 21.0
    assert solver.solve().max_path == 21.0


def test_solver_dedupes_roots(two_sources):
    assert SPTSolver(two_sources, [5, 0, 5]).roots == [5, 0]


def test_solver_rejects_bad_root(diamond):
    with pytest.raises(VertexOutOfRangeError):
        SPTSolver(diamond, [4])


def test_check_weights_refuses_label_setting():
    g = Graph.from_edges(2, [(0, 1, -1.0)])
    cfg = SolverConfig(algorithm=Algorithm.LABEL_SETTING, check_weights=True)
    with pytest.raises(ConfigError):
        SPTSolver(g, [0], config=cfg)
    # label-correcting accepts the same graph
    SPTSolver(g, [0], config=SolverConfig(check_weights=True)).solve()


def test_path_before_solve(diamond):
    with pytest.raises(AlgorithmError):
        SPTSolver(diamond, [0]).path(3)


def test_path(diamond):
    solver = SPTSolver(diamond, [0], config=SolverConfig(algorithm="spt.s"))
    solver.solve()
    assert solver.path(3) == [0, 1, 2, 3]
    assert solver.path(0) == [0]
    with pytest.raises(VertexOutOfRangeError):
        solver.path(9)


def test_path_to_unreached_vertex_is_empty():
    g = Graph.from_edges(3, [(0, 1, 1.0)])
    solver = SPTSolver(g, [0])
    solver.solve()
    assert solver.path(2) == []


def test_path_after_negative_cycle(triangle_cycle):
    solver = SPTSolver(triangle_cycle, [0])
    assert solver.solve().no_lower_bound
    with pytest.raises(NoLowerBoundError):
        solver.path(1)


def test_metrics_and_summary(diamond):
    solver = SPTSolver(diamond, [0], config=SolverConfig(algorithm="spt.s"))
    solver.solve()
    m = solver.metrics(wall_ms=1.5)
    assert m.order == 4
    assert m.edges == 5
    assert m.algorithm == "spt.s"
    assert m.wall_ms == 1.5
    assert m.peak_mib is None
    assert m.counters == solver.summary()
    assert m.counters["iterations"] == 4


def test_result_as_dict(diamond):
    d = solve(diamond, [0]).as_dict()
    assert d == {
        "roots": [0],
        "iterations": 4,
        "no_lower_bound": False,
        "labels": [0.0, 2.0, 3.0, 4.0],
        "predecessors": [0, 0, 1, 2],
        "total_cost": 9.0,
    }


def test_result_as_dict_on_negative_cycle(triangle_cycle):
    d = solve(triangle_cycle, [0]).as_dict()
    assert d["no_lower_bound"] is True
    assert d["iterations"] is None
    assert d["total_cost"] is None


def test_solve_logs_hyper_root_events(two_sources):
    events = []

    class Recorder:
        def debug(self, event, **fields):
            events.append(("debug", event))

        def info(self, event, **fields):
            events.append(("info", event))

        def warning(self, event, **fields):
            events.append(("warning", event))

    solve(two_sources, [0, 5], logger=Recorder())
    names = [e for _, e in events]
    assert names.index("hyper_root.add") < names.index("solve.start")
    assert names[-2:] == ["hyper_root.remove", "solve.done"]
    assert ("debug", "bellman.violated") in events


def test_negative_cycle_logs_warning(triangle_cycle):
    seen = []

    class Recorder:
        def debug(self, event, **fields):
            pass

        def info(self, event, **fields):
            pass

        def warning(self, event, **fields):
            seen.append((event, fields))

    solve(triangle_cycle, [0], logger=Recorder())
    assert seen[0][0] == "negative_cycle"
    assert seen[0][1]["removals"] == 3
