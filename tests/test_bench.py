from __future__ import annotations

import csv

from spt.bench import main, run_once
from spt.solver import Algorithm


def test_run_once_solvers_agree():
    res = run_once(n=40, m=160, seed=2, n_roots=3)
    assert res.max_abs_err < 1e-3
    assert set(res.metrics) == set(Algorithm)
    for algorithm, metrics in res.metrics.items():
        assert metrics.algorithm == algorithm.value
        assert metrics.order == 40
        assert metrics.peak_mib is None


def test_run_once_tracks_memory():
    res = run_once(n=10, m=20, track_mem=True, graph_type="grid")
    assert all(m.peak_mib is not None for m in res.metrics.values())


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    main(["--trials", "2", "--sizes", "8,16", "--roots", "2", "--out-csv", str(out)])
    with out.open(newline="") as fh:
        rows = list(csv.reader(fh))
    assert rows[0][:3] == ["order", "edges", "algorithm"]
    assert len(rows) == 1 + 2 * 2
    assert {r[2] for r in rows[1:]} == {"spt.l", "spt.s"}
    assert "max |spt.s - spt.l|" in capsys.readouterr().out
