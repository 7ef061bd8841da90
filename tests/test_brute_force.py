import pytest

from taubounds.brute_force import (
    SkippedError,
    completions,
    tau_bounds_bf,
    tau_bounds_bf_unweighted,
)
from taubounds.ranking import PartialOrder, StrictOrder
from taubounds.weights import tau_unweighted


def test_completions_count_and_content():
    rank = PartialOrder([["a", "b", "c"], ["d"], ["e", "f"]])
    result = completions(rank)
    assert len(result) == rank.linear_ext_count()
    assert len({tuple(r) for r in result}) == len(result)
    for order in result:
        assert set(order) == rank.item_set()
        assert order[3] == "d"
        assert set(order[:3]) == {"a", "b", "c"}


def test_completions_of_strict_ranking():
    rank = PartialOrder([["a"], ["b"], ["c"]])
    assert completions(rank) == [StrictOrder(["a", "b", "c"])]


def test_bounds_of_strict_rankings_coincide():
    a = PartialOrder([["a"], ["b"], ["c"]])
    b = PartialOrder([["b"], ["a"], ["c"]])
    bounds = tau_bounds_bf_unweighted(a, b)
    expected = tau_unweighted(StrictOrder("abc"), StrictOrder("bac"))
    assert bounds.lb.t == expected
    assert bounds.ub.t == expected


def test_bounds_with_a_tie():
    a = PartialOrder([["a", "b"]])
    b = PartialOrder([["a"], ["b"]])
    bounds = tau_bounds_bf_unweighted(a, b)
    assert bounds.lb.t == -1.0
    assert bounds.ub.t == 1.0
    assert bounds.lb.a == [StrictOrder(["b", "a"])]
    assert bounds.ub.a == [StrictOrder(["a", "b"])]
    assert bounds.lb.b == bounds.ub.b == [StrictOrder(["a", "b"])]


def test_bounds_solutions_reach_their_values():
    a = PartialOrder([["a", "b"], ["c", "d"]])
    b = PartialOrder([["c"], ["a", "d"], ["b"]])
    bounds = tau_bounds_bf_unweighted(a, b)
    assert bounds.lb.t <= bounds.ub.t
    for x, y in zip(bounds.lb.a, bounds.lb.b):
        assert tau_unweighted(x, y) == bounds.lb.t
    for x, y in zip(bounds.ub.a, bounds.ub.b):
        assert tau_unweighted(x, y) == bounds.ub.t


def test_too_many_extensions_skipped():
    big = PartialOrder([list("abcdefghi")])
    with pytest.raises(SkippedError, match="^skipped: too many linear extensions"):
        tau_bounds_bf_unweighted(big, big)


def test_too_many_solutions_skipped():
    a = PartialOrder([list("abcdefg")])
    b = PartialOrder([[e] for e in "abcdefg"])
    with pytest.raises(SkippedError, match="^skipped: too many solutions"):
        tau_bounds_bf(a, b, lambda x, y: 0.0)