import json

import pytest

from bounded_draw import compare_runs, evaluate_strategies, plot_call_counts, run_draws


def test_parse_bound_expressions():
    assert run_draws.parse_bound("170") == 170
    assert run_draws.parse_bound("0x10") == 16
    assert run_draws.parse_bound("1_000") == 1000
    assert run_draws.parse_bound("2**63+1") == 2 ** 63 + 1


def test_run_draws_prints_json(capsys):
    run_draws.main(["--bound", "2**63+1", "--count", "25", "--seed", "7"])
    output = json.loads(capsys.readouterr().out)
    assert output["rangeClass"] == "hard_region"
    assert output["config"]["strategy"] == "paired_road"
    assert len(output["values"]) == 25
    assert all(0 <= v < 2 ** 63 + 1 for v in output["values"])
    assert output["calls"] >= 25


def test_run_draws_rejects_zero_bound():
    with pytest.raises(ValueError):
        run_draws.main(["--bound", "0"])


def _run(argv):
    return run_draws.run(run_draws.build_parser().parse_args(argv))


def test_compare_runs_accepts_identical_runs(tmp_path, capsys):
    lhs = tmp_path / "lhs.json"
    rhs = tmp_path / "rhs.json"
    argv = ["--bound", "170", "--width", "8", "--seed", "3", "--count", "50"]
    lhs.write_text(json.dumps(_run(argv)))
    rhs.write_text(json.dumps(_run(argv)))
    compare_runs.main(["--lhs", str(lhs), "--rhs", str(rhs)])
    assert "match" in capsys.readouterr().out


def test_compare_runs_reports_mismatch():
    argv = ["--bound", "170", "--width", "8", "--seed", "3", "--count", "50"]
    lhs = _run(argv)
    rhs = _run(argv)
    rhs["values"][10] = (rhs["values"][10] + 1) % 170
    with pytest.raises(AssertionError, match=r"values\[10\]"):
        compare_runs.compare_outputs(lhs, rhs)
    other_strategy = _run(argv + ["--strategy", "bit_bank"])
    with pytest.raises(AssertionError, match="config"):
        compare_runs.compare_outputs(lhs, other_strategy)


def test_evaluate_then_plot(tmp_path):
    summary_path = tmp_path / "summary.json"
    evaluate_strategies.main(
        [
            "--width", "16",
            "--samples", "500",
            "--fractions", "0.25", "0.5001", "0.6",
            "--output", str(summary_path),
            "--log-level", "WARNING",
        ]
    )
    summary = json.loads(summary_path.read_text())
    assert [entry["rangeClass"] for entry in summary] == ["bottom_half", "hard_region", "hard_region"]
    hard = summary[1]
    assert hard["paired_road"]["expectedCalls"] == pytest.approx(1.6, abs=0.01)
    assert hard["bit_bank"]["expectedCalls"] is None
    assert "callsSaved" in hard["paired_road"]
    assert "callsSaved" not in hard["baseline"]
    assert 0.0 <= hard["paired_road"]["pValue"] <= 1.0

    figure = tmp_path / "calls.png"
    plot_call_counts.main(["--summary", str(summary_path), "--output", str(figure)])
    assert figure.exists()


def test_evaluate_rejects_bad_fraction(tmp_path):
    with pytest.raises(ValueError):
        evaluate_strategies.main(["--fractions", "1.5", "--output", str(tmp_path / "x.json")])


def test_plot_rejects_empty_summary(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        plot_call_counts.main(["--summary", str(path), "--output", str(tmp_path / "out.png")])


def test_plot_rejects_summary_without_strategies(tmp_path):
    path = tmp_path / "summary.json"
    path.write_text(json.dumps([{"fraction": 0.6, "bound": 39321, "rangeClass": "hard_region"}]))
    with pytest.raises(ValueError, match="Summary"):
        plot_call_counts.main(["--summary", str(path), "--output", str(tmp_path / "out.png")])
