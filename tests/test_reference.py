import csv

import pytest

from taubounds.common import RankingsCsvRow
from taubounds.ranking import RankingError, partial_from_string, strict_from_partial
from taubounds.reference import main, run_solver
from taubounds.weights import tau_unweighted


def _pairs(text):
    return [tuple(part.split("/")) for part in text.split("|")]


def _tau_of(pair):
    inp_map = {}
    a = strict_from_partial(partial_from_string(pair[0], inp_map))
    b = strict_from_partial(partial_from_string(pair[1], inp_map))
    return tau_unweighted(a, b)


def test_identical_strict_rankings():
    out = run_solver(RankingsCsvRow("x y", "x y"))
    assert out.tmin == out.tmax == 1.0
    assert out.pmin == "x y/x y"
    assert out.pmax == "x y/x y"
    assert (out.a, out.b) == ("x y", "x y")


def test_tied_ranking_solutions_reach_bounds():
    out = run_solver(RankingsCsvRow("(x y) z", "x y z"))
    assert out.tmin <= out.tmax
    min_pairs = _pairs(out.pmin)
    max_pairs = _pairs(out.pmax)
    for pair in min_pairs:
        assert _tau_of(pair) == pytest.approx(out.tmin)
        assert pair[1] == "x y z"
    for pair in max_pairs:
        assert _tau_of(pair) == pytest.approx(out.tmax)
    lefts = {p[0] for p in min_pairs} | {p[0] for p in max_pairs}
    assert lefts == {"x y z", "y x z"}


def test_too_many_extensions_gives_none():
    tie = "(a b c d e f g h i)"
    assert run_solver(RankingsCsvRow(tie, tie)) is None


def test_disjoint_rankings_give_none():
    assert run_solver(RankingsCsvRow("x y", "x z")) is None


def test_malformed_ranking_raises():
    with pytest.raises(RankingError):
        run_solver(RankingsCsvRow("a (b", "a b"))


def _write_input(path, rows, header=("a", "b")):
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        writer.writerows(rows)


def test_main_writes_sorted_cases(tmp_path, capsys):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    tie = "(a b c d e f g h i)"
    _write_input(source, [("x y z", "z y x"), ("x y", "x y"), (tie, tie)])

    main([str(source), str(target)])

    with open(target, newline="", encoding="utf-8") as handle:
        records = list(csv.reader(handle))
    assert records[0] == ["a", "b", "tmin", "tmax", "pmin", "pmax"]
    body = records[1:]
    assert [r[0] for r in body] == ["x y", "x y z"]
    assert body[0][2] == "1.0"
    for record in body:
        assert float(record[2]) <= float(record[3])
    assert "evaluated 2 test cases" in capsys.readouterr().out


def test_main_rejects_wrong_header(tmp_path):
    source = tmp_path / "in.csv"
    _write_input(source, [("x", "y")], header=("left", "right"))
    with pytest.raises(ValueError):
        main([str(source), str(tmp_path / "out.csv")])