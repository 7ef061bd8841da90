import csv
import sys

import pytest

from taubounds.verifier_cli import main

HEADER = ["a", "b", "tmin", "tmax", "pmin", "pmax"]
CASE = ["x y", "y x", "-1", "1", "x y/y x", "x y/x y"]


def _make_solver(path, output, code=0):
    path.write_text(
        f"#!{sys.executable}\nimport sys\nsys.stdout.write({output!r})\nsys.exit({code})\n"
    )
    path.chmod(0o755)
    return path


def _write_data(path, rows):
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        writer.writerows(rows)
    return path


def _argv(tmp_path, output, code=0):
    solver = _make_solver(tmp_path / "solver", output, code)
    data = _write_data(tmp_path / "cases.csv", [CASE])
    return [str(solver), str(data)]


def test_complete_solution_passes(tmp_path, capsys):
    main(_argv(tmp_path, "tmin:-1\nminp:x y/y x\ntmax:1\nmaxp:x y/x y\n"))
    out = capsys.readouterr().out
    assert "running 1 tests..." in out
    assert "1/1 test cases passed," in out
    assert "1/1 solutions were complete." in out


def test_partial_solution_passes_incomplete(tmp_path, capsys):
    main(_argv(tmp_path, "tmin:-1\nminp:x y/y x\n"))
    out = capsys.readouterr().out
    assert "1/1 test cases passed," in out
    assert "0/1 solutions were complete." in out


def test_wrong_bound_is_reported(tmp_path, capsys):
    main(_argv(tmp_path, "tmin:0.5\nminp:x y/y x\n"))
    out = capsys.readouterr().out
    assert "0/1 test cases passed," in out
    assert "1/1 cases failed." in out
    assert "reason: Tmin(" in out


def test_skipped_run_is_counted(tmp_path, capsys):
    main(_argv(tmp_path, "skipped: too many linear extensions\n"))
    out = capsys.readouterr().out
    assert "1 run(s) skipped" in out
    assert "0/1 test cases passed," in out


def test_empty_output_is_reported(tmp_path, capsys):
    main(_argv(tmp_path, ""))
    out = capsys.readouterr().out
    assert "empty algo out on test case" in out
    assert "> a: x y" in out


def test_failing_solver_raises(tmp_path):
    argv = _argv(tmp_path, "", code=3)
    with pytest.raises(RuntimeError, match="process failed"):
        main(argv)


def test_wrong_header_raises(tmp_path):
    solver = _make_solver(tmp_path / "solver", "")
    data = tmp_path / "cases.csv"
    data.write_text("a,b\nx y,y x\n")
    with pytest.raises(ValueError):
        main([str(solver), str(data)])