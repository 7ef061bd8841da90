import sys
from dataclasses import dataclass

import pytest

from taubounds.common import (
    AlgoOut,
    RankingsCsvRow,
    display_cases,
    parse_row,
    progress_bar,
    read_glob_csv,
    run_solver_on,
)


@dataclass
class _ArgsCase:
    args: list

    def algo_args(self):
        return list(self.args)


def test_rankings_row_args():
    row = RankingsCsvRow("x (y z)", "z y x")
    assert row.algo_args() == ["x (y z)", "z y x"]


def test_parse_row():
    assert parse_row(["a b", "b a"]) == RankingsCsvRow("a b", "b a")
    with pytest.raises(ValueError):
        parse_row(["only"])


def test_algo_out_equality_within_precision():
    left = AlgoOut(tmin=-0.5, tmax=0.5, minp=[("a b", "b a")])
    assert left == AlgoOut(tmin=-0.5 + 1e-9, tmax=0.5)
    assert not left == AlgoOut(tmin=-0.4, tmax=0.5)
    assert not left == AlgoOut(tmin=-0.5, tmax=0.6)
    assert left == AlgoOut()


def test_display_cases():
    assert display_cases([("a", "b"), ("c", "d")]) == "a/b|c/d"
    assert display_cases([]) == ""


def _write(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_read_glob_csv_dedups_consecutive(tmp_path):
    _write(tmp_path / "one.csv", ["a,b", "x y,y x", "x y,y x", "p,q"])
    _write(tmp_path / "two.csv", ["a,b", "x y,y x"])
    rows = read_glob_csv(str(tmp_path / "*.csv"), ["a", "b"])
    assert rows == [["x y", "y x"], ["p", "q"], ["x y", "y x"]]


def test_read_glob_csv_header_mismatch(tmp_path):
    _write(tmp_path / "bad.csv", ["c,d", "x,y"])
    with pytest.raises(ValueError):
        read_glob_csv(str(tmp_path / "*.csv"), ["a", "b"])
    assert read_glob_csv(str(tmp_path / "*.csv"), []) == [["x", "y"]]


def test_read_glob_csv_ragged_record(tmp_path):
    _write(tmp_path / "ragged.csv", ["a,b", "x,y,z"])
    with pytest.raises(ValueError):
        read_glob_csv(str(tmp_path / "*.csv"), ["a", "b"])


def test_run_solver_on_returns_stdout():
    case = _ArgsCase(["-c", "import sys; sys.stdout.write(sys.argv[1])", "hello"])
    out, elapsed = run_solver_on(sys.executable, case)
    assert out == "hello"
    assert elapsed >= 0


def test_run_solver_on_failure():
    case = _ArgsCase(["-c", "import sys; sys.exit(3)"])
    with pytest.raises(RuntimeError, match="process failed"):
        run_solver_on(sys.executable, case)


def test_progress_bar_total():
    bar = progress_bar(7)
    try:
        assert bar.total == 7
    finally:
        bar.close()