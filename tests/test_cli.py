from __future__ import annotations

import json

import pytest

from spt.cli import EXAMPLE_ADJ, main


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "graph.adj"
    path.write_text(EXAMPLE_ADJ, encoding="utf-8")
    return str(path)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_example_prints_sample(capsys):
    assert main(["--example"]) == 0
    assert capsys.readouterr().out == EXAMPLE_ADJ


def test_solve_example_file(example_file, capsys):
    assert main(["--edges", example_file, "--target", "3"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["algorithm"] == "spt.l"
    assert out["max_path"] == 21.0
    assert out["labels"] == [0.0, 2.0, 3.0, 4.0]
    assert out["predecessors"] == [0, 0, 1, 2]
    assert out["iterations"] == 4
    assert out["path"] == [0, 1, 2, 3]


def test_multi_root_label_setting(example_file, capsys):
    assert main(["--edges", example_file, "--roots", "0,2", "--algorithm", "0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["algorithm"] == "spt.s"
    assert out["roots"] == [0, 2]
    assert out["labels"] == [0.0, 2.0, 0.0, 1.0]
    assert out["predecessors"] == [0, 0, 2, 2]


def test_negative_cycle_exit_code(tmp_path, capsys):
    path = _write(tmp_path, "cycle.csv", "0,1,1\n1,2,1\n2,0,-3\n")
    assert main(["--edges", path]) == 2
    captured = capsys.readouterr()
    assert json.loads(captured.out)["no_lower_bound"] is True
    assert "negative_cycle" in captured.err
    assert "no lower bound" in captured.err


def test_label_setting_warns_on_negative_edge(tmp_path, capsys):
    path = _write(tmp_path, "g.csv", "0,1,1\n2,1,-4\n")
    assert main(["--edges", path, "--algorithm", "spt.s"]) == 0
    assert "negative_edge" in capsys.readouterr().err


def test_check_weights_is_a_usage_error(tmp_path, capsys):
    path = _write(tmp_path, "g.csv", "0,1,1\n2,1,-4\n")
    code = main(["--edges", path, "--algorithm", "spt.s", "--check-weights"])
    assert code == 64
    assert "non-negative" in capsys.readouterr().err


@pytest.mark.parametrize(
    "extra",
    [
        ["--roots", "9"],
        ["--algorithm", "floyd"],
        ["--max-path", "0"],
    ],
)
def test_usage_errors(example_file, extra, capsys):
    assert main(["--edges", example_file, *extra]) == 64
    assert "error:" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["--edges", str(tmp_path / "nope.adj")]) == 64
    assert "not found" in capsys.readouterr().err


def test_malformed_file(tmp_path, capsys):
    path = _write(tmp_path, "g.adj", "2\n1:x\n")
    assert main(["--edges", path]) == 64
    assert "line 2" in capsys.readouterr().err


def test_invalid_roots_are_skipped(example_file, capsys):
    assert main(["--edges", example_file, "--roots", "1 x 7"]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["roots"] == [1]
    assert captured.err.count("root.invalid") == 2


def test_random_graph_with_exports(tmp_path, capsys):
    tree = tmp_path / "tree.json"
    graphml = tmp_path / "tree.graphml"
    metrics = tmp_path / "metrics.json"
    code = main(
        [
            "--random",
            "--n", "12",
            "--m", "30",
            "--seed", "5",
            "--roots", "0 4",
            "--export-json", str(tree),
            "--export-graphml", str(graphml),
            "--metrics-out", str(metrics),
        ]
    )
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out["labels"]) == 12

    data = json.loads(tree.read_text(encoding="utf-8"))
    assert data["roots"] == [0, 4]
    assert len(data["nodes"]) == 12
    assert graphml.read_text(encoding="utf-8").startswith("<?xml")

    m = json.loads(metrics.read_text(encoding="utf-8"))
    assert m["order"] == 12
    assert m["edges"] == 30
    assert m["algorithm"] == "spt.l"
    assert m["counters"]["iterations"] == out["iterations"]


def test_log_json_goes_to_stdout(example_file, capsys):
    assert main(["--edges", example_file, "--log-json", "--log-level", "debug"]) == 0
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    events = [line["event"] for line in lines]
    assert "solve.start" in events
    assert "bellman.violated" in events
    assert events[-2:] == ["run", "result"]
    assert lines[-2]["iterations"] == 4


def test_log_json_alone_emits_result(example_file, capsys):
    code = main(["--edges", example_file, "--roots", "0", "--log-json", "--target", "3"])
    assert code == 0
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert all(line["level"] in ("info", "warning") for line in lines)
    result = lines[-1]
    assert result["event"] == "result"
    assert result["labels"] == [0.0, 2.0, 3.0, 4.0]
    assert result["predecessors"] == [0, 0, 1, 2]
    assert result["path"] == [0, 1, 2, 3]


def test_log_json_result_on_negative_cycle(tmp_path, capsys):
    path = _write(tmp_path, "cycle.csv", "0,1,1\n1,2,1\n2,0,-3\n")
    assert main(["--edges", path, "--log-json"]) == 2
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [line["event"] for line in lines if line["level"] == "warning"] == ["negative_cycle"]
    assert lines[-1]["event"] == "result"
    assert lines[-1]["no_lower_bound"] is True


def test_print_graph(example_file, capsys):
    assert main(["--edges", example_file, "--print-graph"]) == 0
    err = capsys.readouterr().err
    assert "0 -> 1 (2.000), 2 (5.000)" in err
    assert "3 ->" in err


def test_source_is_required(capsys):
    with pytest.raises(SystemExit):
        main([])
